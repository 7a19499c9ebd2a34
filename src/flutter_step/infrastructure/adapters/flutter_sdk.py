"""FlutterSdkInstaller — download and unpack a Flutter SDK release archive."""

from __future__ import annotations

import asyncio
import logging
import shutil
import sys
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import TYPE_CHECKING

import requests

from flutter_step.domain.errors import EnvironmentSetupError, SdkCheckError, SdkInstallError

if TYPE_CHECKING:
    from flutter_step.domain.ports import SdkInstallerPort

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://storage.googleapis.com/flutter_infra/releases"
_DOWNLOAD_TIMEOUT_S = 60
_CHUNK_SIZE = 1024 * 1024

_PLATFORMS: dict[str, str] = {"darwin": "macos", "linux": "linux"}
_ARCHIVE_EXTENSIONS: dict[str, str] = {"macos": "zip", "linux": "tar.xz"}


def sdk_platform(os_name: str | None = None) -> str:
    """Map the host OS to Flutter's release platform name."""
    name = os_name if os_name is not None else sys.platform
    try:
        return _PLATFORMS[name]
    except KeyError:
        raise EnvironmentSetupError(f"unsupported OS: {name}") from None


def archive_extension(platform: str) -> str:
    return _ARCHIVE_EXTENSIONS[platform]


def sdk_download_url(version: str, platform: str, base_url: str = DEFAULT_BASE_URL) -> str:
    """Build the release archive URL; the channel is the version's last ``-`` component.

    ``1.2.1-stable`` on linux resolves to
    ``<base>/stable/linux/flutter_linux_v1.2.1-stable.tar.xz``.
    """
    channel = version.split("-")[-1]
    ext = archive_extension(platform)
    return f"{base_url.rstrip('/')}/{channel}/{platform}/flutter_{platform}_v{version}.{ext}"


class FlutterSdkInstaller:
    """Install the SDK so that ``sdk_dir/bin/flutter`` exists.

    Release archives contain a top-level ``flutter/`` directory, so they are
    unpacked into ``sdk_dir.parent``. Satisfies the SdkInstallerPort protocol.
    """

    if TYPE_CHECKING:
        _protocol_check: SdkInstallerPort

    def __init__(self, sdk_dir: Path, base_url: str = DEFAULT_BASE_URL, platform: str | None = None) -> None:
        self._sdk_dir = sdk_dir
        self._base_url = base_url
        self._platform = platform

    @property
    def sdk_dir(self) -> Path:
        return self._sdk_dir

    @property
    def executable(self) -> Path:
        return self._sdk_dir / "bin" / "flutter"

    def check_environment(self) -> str:
        """Return the release platform for this host; unsupported hosts raise EnvironmentSetupError."""
        return self._platform or sdk_platform()

    def is_installed(self) -> bool:
        try:
            return self._sdk_dir.is_dir()
        except OSError as exc:
            raise SdkCheckError(f"Could not check if Flutter SDK is installed: {exc}") from exc

    async def install(self, version: str) -> None:
        platform = self.check_environment()
        url = sdk_download_url(version, platform, self._base_url)
        logger.info("Extracting Flutter SDK to %s", self._sdk_dir)
        await asyncio.to_thread(self._download_and_unpack, url, platform)

    def _download_and_unpack(self, url: str, platform: str) -> None:
        target_dir = self._sdk_dir.parent
        suffix = "." + archive_extension(platform)
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.TemporaryDirectory() as tmp:
                archive = Path(tmp) / f"flutter{suffix}"
                logger.info("Downloading %s", url)
                with requests.get(url, stream=True, timeout=_DOWNLOAD_TIMEOUT_S) as response:
                    response.raise_for_status()
                    with archive.open("wb") as f:
                        for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                            f.write(chunk)
                if archive_extension(platform) == "zip":
                    shutil.unpack_archive(archive, target_dir)
                else:
                    shutil.unpack_archive(archive, target_dir, filter="data")
            # zipfile drops permission bits
            if self.executable.exists():
                self.executable.chmod(0o755)
        except requests.RequestException as exc:
            raise SdkInstallError(f"Could not download Flutter SDK from {url}: {exc}") from exc
        except (OSError, tarfile.TarError, zipfile.BadZipFile) as exc:
            raise SdkInstallError(f"Could not extract Flutter SDK: {exc}") from exc
