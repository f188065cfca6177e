"""
AList client for LRCKit.

Talks to the AList file-listing HTTP API to browse directories, resolve
download URLs, and fetch caption text. Listing failures raise AListError;
caption-related failures degrade to None so playback can continue
without captions.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from ..models import AListConfig, RemoteFile
from ..utils import join_remote_path

logger = logging.getLogger(__name__)

LIST_ENDPOINT = "/api/fs/list"
GET_ENDPOINT = "/api/fs/get"


class AListError(Exception):
    """Raised when an AList request fails or returns an error envelope."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class AListClient:
    """
    Client for an AList server.

    Handles directory listing, download-URL resolution, and plain-text
    downloads for caption files.
    """

    def __init__(
        self,
        server_url: str,
        token: str = "",
        timeout: int = 30,
        verify_ssl: bool = True
    ):
        """
        Initialize AList client.

        Args:
            server_url: Base URL of the AList server, e.g. http://192.168.1.5:5244
            token: Optional token sent as the Authorization header
            timeout: Request timeout in seconds (default: 30)
            verify_ssl: Whether to verify SSL certificates (default: True)

        Raises:
            ValueError: If server_url is empty
        """
        server_url = (server_url or "").strip().rstrip("/")
        if not server_url:
            raise ValueError("AList server URL cannot be empty")

        self.server_url = server_url
        self.token = (token or "").strip()
        self.timeout = timeout
        self.verify_ssl = verify_ssl

    @classmethod
    def from_config(cls, config: AListConfig) -> "AListClient":
        """Create a client from an AListConfig object."""
        return cls(
            server_url=config.server_url,
            token=config.token,
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
        )

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = self.token
        return headers

    def _post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a JSON payload and return the ``data`` object of the envelope.

        Raises:
            AListError: On network errors, HTTP errors, invalid JSON, or a
                non-200 AList status code
        """
        url = f"{self.server_url}{endpoint}"
        try:
            response = requests.post(
                url,
                json=payload,
                headers=self._headers(),
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
            response.raise_for_status()
            body = response.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise AListError(f"AList request to {endpoint} failed: {str(e)}", status=status)
        except requests.RequestException as e:
            raise AListError(f"AList request to {endpoint} failed: {str(e)}")
        except ValueError as e:
            raise AListError(f"AList returned invalid JSON from {endpoint}: {str(e)}")

        if not isinstance(body, dict):
            raise AListError(f"AList returned an unexpected response from {endpoint}")

        code = body.get("code", 200)
        if code != 200:
            message = body.get("message") or "unknown error"
            raise AListError(f"AList error {code} from {endpoint}: {message}", status=code)

        data = body.get("data")
        return data if isinstance(data, dict) else {}

    def list_files(self, path: str = "/") -> List[RemoteFile]:
        """
        List a directory on the AList server.

        Args:
            path: Remote directory path (default: root)

        Returns:
            Directory entries in server order; empty for an empty directory

        Raises:
            AListError: If the listing cannot be retrieved
        """
        logger.info(f"Listing AList directory: {path}")
        try:
            data = self._post(LIST_ENDPOINT, {"path": path})
        except AListError as e:
            logger.error(f"Failed to list {path}: {str(e)}")
            raise

        content = data.get("content") or []
        if not isinstance(content, list):
            content = []

        files = []
        for item in content:
            remote_file = RemoteFile.from_dict(item)
            if remote_file is None:
                logger.debug(f"Skipping listing item without a name in {path}")
                continue
            files.append(remote_file)

        logger.info(f"Found {len(files)} entries in {path}")
        return files

    def get_download_url(self, path: str) -> Optional[str]:
        """
        Resolve the raw download URL of a remote file.

        Args:
            path: Remote file path

        Returns:
            Download URL, or None if it cannot be resolved
        """
        try:
            data = self._post(GET_ENDPOINT, {"path": path})
        except AListError as e:
            logger.warning(f"Failed to resolve download URL for {path}: {str(e)}")
            return None

        raw_url = data.get("raw_url")
        if not isinstance(raw_url, str) or not raw_url:
            logger.warning(f"No download URL returned for {path}")
            return None
        return raw_url

    def fetch_text(self, url: str) -> Optional[str]:
        """
        Download a text resource such as an LRC file.

        Content is decoded as UTF-8 (byte order mark tolerated); other
        encodings fall back to the encoding detected by requests.

        Args:
            url: Fully resolved download URL

        Returns:
            Decoded text, or None if the download fails
        """
        try:
            logger.debug(f"Fetching text from: {url[:100]}")
            response = requests.get(url, timeout=self.timeout, verify=self.verify_ssl)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning(f"Failed to fetch text from {url[:100]}: {str(e)}")
            return None

        try:
            return response.content.decode("utf-8-sig")
        except UnicodeDecodeError:
            encoding = response.apparent_encoding or "utf-8"
            logger.debug(f"Content is not UTF-8, decoding as {encoding}")
            return response.content.decode(encoding, errors="replace")

    def fetch_captions(self, directory: str, caption_file: RemoteFile) -> Optional[str]:
        """
        Resolve and download a caption file from a directory listing.

        Args:
            directory: Remote directory containing the caption file
            caption_file: Listing entry of the caption file

        Returns:
            Caption text, or None if it is unavailable
        """
        url = self.get_download_url(join_remote_path(directory, caption_file.name))
        if url is None:
            return None
        return self.fetch_text(url)
