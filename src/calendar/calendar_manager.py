"""
Google Calendar integration for the ShortNote Calendar Bot
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from typing import Dict, List, Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from config.settings import Config

logger = logging.getLogger(__name__)


class CalendarError(Exception):
    """Base error for calendar and authorization failures"""


class MissingRefreshTokenError(CalendarError):
    """The stored credential is expired and carries no refresh token"""


class CalendarManager:
    """Google Calendar manager working on per-user credential pairs"""

    def __init__(self):
        self.config = Config()

    def _build_flow(self) -> Flow:
        return Flow.from_client_config(
            self.config.get_client_config(),
            scopes=self.config.SCOPES,
            redirect_uri=self.config.GOOGLE_REDIRECT_URI,
            autogenerate_code_verifier=False,
        )

    def get_authorization_url(self, state: str) -> str:
        """Generate the Google consent URL carrying the caller state"""
        flow = self._build_flow()
        authorization_url, _ = flow.authorization_url(
            access_type='offline',
            prompt='consent',
            state=state,
        )
        return authorization_url

    def exchange_code(self, code: str) -> Dict:
        """Exchange an authorization code for a credential pair"""
        flow = self._build_flow()
        flow.fetch_token(code=code)
        credentials = flow.credentials

        logger.info(f"Token exchange complete (refresh token: {bool(credentials.refresh_token)})")
        if not credentials.refresh_token:
            logger.warning("⚠️  No refresh token received; the login will expire with the access token")

        return self._token_data(credentials)

    def _get_credentials(self, token_data: Dict) -> Credentials:
        """Build Google credentials from a stored credential pair"""
        expiry = token_data.get('expiry')
        scope = token_data.get('scope')
        return Credentials(
            token=token_data.get('access_token'),
            refresh_token=token_data.get('refresh_token'),
            token_uri=self.config.GOOGLE_TOKEN_URI,
            client_id=self.config.GOOGLE_CLIENT_ID,
            client_secret=self.config.GOOGLE_CLIENT_SECRET,
            scopes=scope.split() if scope else self.config.SCOPES,
            expiry=datetime.fromisoformat(expiry) if expiry else None,
        )

    @staticmethod
    def _token_data(credentials: Credentials) -> Dict:
        return {
            'access_token': credentials.token,
            'refresh_token': credentials.refresh_token,
            'token_type': 'Bearer',
            'scope': ' '.join(credentials.scopes or []),
            'expiry': credentials.expiry.isoformat() if credentials.expiry else None,
        }

    def refresh_credentials(self, token_data: Dict) -> Dict:
        """
        Return a usable credential pair, refreshing the access token if needed

        Raises:
            MissingRefreshTokenError: the access token is no longer valid and
                there is no refresh token to obtain a new one
        """
        credentials = self._get_credentials(token_data)
        if credentials.valid:
            return token_data

        if not credentials.refresh_token:
            raise MissingRefreshTokenError("No refresh token is set.")

        # RefreshError and transport errors propagate to the caller
        credentials.refresh(Request())
        logger.info("🔄 Access token refreshed")

        refreshed = self._token_data(credentials)
        # Google does not always return the refresh token again
        refreshed['refresh_token'] = refreshed['refresh_token'] or token_data.get('refresh_token')
        return refreshed

    def _build_calendar_service(self, token_data: Dict):
        """Build Google Calendar service for a credential pair"""
        credentials = self._get_credentials(token_data)
        return build("calendar", "v3", credentials=credentials, cache_discovery=False)

    def insert_event(self, token_data: Dict, body: Dict) -> Dict:
        """Create an event on the primary calendar and return the created resource"""
        calendar_service = self._build_calendar_service(token_data)
        created_event = calendar_service.events().insert(
            calendarId=self.config.CALENDAR_ID,
            body=body,
        ).execute()
        logger.info(f"Event created: {created_event.get('htmlLink')}")
        return created_event

    def list_events(self, token_data: Dict) -> List[Dict]:
        """List every event on the primary calendar"""
        calendar_service = self._build_calendar_service(token_data)
        events = []
        page_token: Optional[str] = None

        while True:
            events_result = calendar_service.events().list(
                calendarId=self.config.CALENDAR_ID,
                pageToken=page_token,
            ).execute()
            events.extend(events_result.get('items', []))
            page_token = events_result.get('nextPageToken')
            if not page_token:
                break

        return events

    def delete_event(self, token_data: Dict, event_id: str):
        """Delete one event from the primary calendar"""
        calendar_service = self._build_calendar_service(token_data)
        calendar_service.events().delete(
            calendarId=self.config.CALENDAR_ID,
            eventId=event_id,
        ).execute()

    def delete_all_events(self, token_data: Dict) -> int:
        """Delete every event on the primary calendar in parallel"""
        events = self.list_events(token_data)
        if not events:
            return 0

        logger.info(f"🗑️  Deleting {len(events)} events")
        errors = []

        with ThreadPoolExecutor(max_workers=min(len(events), 5)) as executor:
            future_to_id = {
                executor.submit(self.delete_event, token_data, event['id']): event['id']
                for event in events
            }

            for future in as_completed(future_to_id):
                event_id = future_to_id[future]
                try:
                    future.result()
                except HttpError as e:
                    logger.error(f"HTTP error deleting event {event_id}: {e}")
                    errors.append(e)

        if errors:
            raise CalendarError(f"Failed to delete {len(errors)} of {len(events)} events")

        return len(events)
