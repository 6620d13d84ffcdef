"""
dbxcore - OAuth Session Module

Credential provider for the API: holds the app key/secret and the OAuth2
bearer token, and performs authorized HTTP calls.

Author: dbxcore Project
"""

import logging
from typing import Optional
from urllib.parse import urlencode

import requests

from dbxcore.exceptions import DropboxAuthError, DropboxTransportError

logger = logging.getLogger(__name__)


class OAuthSession:
    """
    OAuth 2.0 credential provider.

    Responsibilities:
    - Build the authorization URL for the code flow
    - Exchange an authorization code for an access token
    - Attach "Authorization: Bearer <token>" to authorized requests
    - Own the requests.Session used for connection pooling
    """

    def __init__(self, auth_url: str, token_url: str,
                 client_id: Optional[str] = None, client_secret: Optional[str] = None,
                 verify_ssl: bool = True):
        """
        Initialize the credential provider.

        Args:
            auth_url: OAuth2 authorization endpoint
            token_url: OAuth2 token endpoint
            client_id: App key
            client_secret: App secret
            verify_ssl: Whether to verify SSL certificates
        """
        self.auth_url = auth_url
        self.token_url = token_url
        self.client_id = client_id
        self.client_secret = client_secret
        self.verify_ssl = verify_ssl
        self.token: Optional[str] = None
        self.session = requests.Session()

    def close(self):
        """Close the underlying HTTP session."""
        if self.session:
            self.session.close()
            logger.debug("OAuth session closed")

    def set_app_info(self, client_id: str, client_secret: str):
        """Set the app key and app secret registered for this application."""
        self.client_id = client_id
        self.client_secret = client_secret

    def set_access_token(self, access_token: str):
        """Set the access token directly, skipping the authorization flow."""
        self.token = access_token

    @property
    def access_token(self) -> Optional[str]:
        return self.token

    def authorize_url(self, state: Optional[str] = None) -> str:
        """
        Build the URL the user must visit to authorize this application.

        Args:
            state: Optional opaque value echoed back by the server

        Returns:
            Authorization URL for the code flow (no redirect URI)
        """
        if not self.client_id:
            raise DropboxAuthError("App key not set - call set_app_info() first")
        params = {"response_type": "code", "client_id": self.client_id}
        if state:
            params["state"] = state
        return f"{self.auth_url}?{urlencode(params)}"

    def exchange_code(self, code: str) -> str:
        """
        Exchange an authorization code for an access token.

        Args:
            code: Code displayed to the user after authorizing the app

        Returns:
            The access token, also stored on this session

        Raises:
            DropboxAuthError: If the code is rejected
            DropboxTransportError: If the server cannot be reached
        """
        if not self.client_id or not self.client_secret:
            raise DropboxAuthError("App key and secret not set - call set_app_info() first")

        logger.info("Exchanging authorization code for access token")
        payload = {
            "grant_type": "authorization_code",
            "code": code,
            "client_id": self.client_id,
            "client_secret": self.client_secret
        }

        try:
            response = self.session.post(self.token_url, data=payload, verify=self.verify_ssl, timeout=30)
        except requests.exceptions.RequestException as e:
            logger.error(f"Token request failed: {e}")
            raise DropboxTransportError(f"Cannot reach token endpoint: {e}")

        try:
            if response.status_code != 200:
                logger.warning(f"Token exchange failed with status {response.status_code}")
                raise DropboxAuthError(f"Authorization code rejected (HTTP {response.status_code})")
            try:
                token = response.json().get("access_token")
            except ValueError:
                token = None
            if not token:
                raise DropboxAuthError("Token endpoint did not return an access token")
        finally:
            response.close()

        self.token = token
        logger.info("Access token obtained")
        return token

    def request(self, method: str, url: str, authenticated: bool = True, **kwargs) -> requests.Response:
        """
        Perform an HTTP request, authorized unless told otherwise.

        Args:
            method: HTTP method
            url: Full URL without query string
            authenticated: Attach the bearer token
            **kwargs: Passed to requests.Session.request

        Returns:
            The raw response; the caller must close it

        Raises:
            DropboxAuthError: If authenticated and no token is set
        """
        headers = kwargs.pop("headers", None) or {}
        if authenticated:
            if not self.token:
                logger.error("Attempted API request without authentication")
                raise DropboxAuthError("authentication required")
            headers["Authorization"] = f"Bearer {self.token}"

        if "verify" not in kwargs:
            kwargs["verify"] = self.verify_ssl

        return self.session.request(method, url, headers=headers, **kwargs)
