"""Download and unpack template archives.

A template is a branch of a framework repository, served as a zip archive at
``{download_base_url}/{repo}/zip/refs/heads/{branch}``.  The archive unpacks
to a single ``{repo}-{branch}`` directory, which is what ``fetch`` returns.
"""

from __future__ import annotations

import asyncio
import shutil
import tempfile
import zipfile
from pathlib import Path
from typing import Callable
from urllib.parse import urlparse

import httpx
from rich.markup import escape

from create_scaffoldly.catalog import Framework
from create_scaffoldly.utils import console


class FetchError(Exception):
    """Raised when a template archive cannot be downloaded or extracted."""

    def __init__(self, message: str, url: str = "") -> None:
        self.url = url
        super().__init__(message)


class TemplateFetcher:
    """Fetches a framework branch into a fresh scratch directory.

    No retries are attempted; any network, filesystem or archive failure is
    raised as ``FetchError`` with the original exception chained.
    """

    def __init__(
        self,
        timeout: float = 120,
        scratch_prefix: str = "template-",
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        self.timeout = timeout
        self.scratch_prefix = scratch_prefix
        self._client_factory = client_factory or self._default_client

    def _default_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            follow_redirects=True,
        )

    async def download(self, url: str) -> bytes:
        """GET *url* and return the response body."""
        try:
            async with self._client_factory() as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.content
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                f"Error downloading or extracting ZIP file: HTTP "
                f"{exc.response.status_code} from {url}",
                url=url,
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(
                f"Error downloading or extracting ZIP file: {exc!r}",
                url=url,
            ) from exc

    async def fetch(self, framework: Framework, branch: str) -> Path:
        """Download ``framework``'s *branch* and return the extracted template root."""
        url = framework.archive_url(branch)
        console.print(f"[dim]Downloading {escape(url)}[/dim]")

        payload = await self.download(url)

        try:
            return await asyncio.to_thread(
                self._unpack, payload, url, f"{framework.repo}-{branch}"
            )
        except (OSError, zipfile.BadZipFile) as exc:
            raise FetchError(
                f"Error downloading or extracting ZIP file: {exc}", url=url
            ) from exc

    def _unpack(self, payload: bytes, url: str, root_name: str) -> Path:
        scratch = Path(tempfile.mkdtemp(prefix=self.scratch_prefix))
        archive_name = urlparse(url).path.rstrip("/").split("/")[-1] or "template.zip"
        archive_path = scratch / archive_name
        archive_path.write_bytes(payload)

        with zipfile.ZipFile(archive_path) as archive:
            archive.extractall(scratch)
        archive_path.unlink()

        template_root = scratch / root_name
        if not template_root.is_dir():
            raise FetchError(
                f"Archive from {url} did not contain the expected '{root_name}' directory",
                url=url,
            )
        return template_root

    @staticmethod
    def discard(template_root: str | Path) -> None:
        """Remove the scratch directory that holds *template_root*."""
        shutil.rmtree(Path(template_root).parent, ignore_errors=True)
