import logging
import sys

from app.config import Mode
from app.exceptions.custom import UnsupportedPlatformError
from app.schemas.gsm import LaunchConfig, Viewport

logger = logging.getLogger(__name__)

# Chromium flags recommended for serverless/container deployments
_BASE_ARGS = (
    "--autoplay-policy=user-gesture-required",
    "--disable-background-networking",
    "--disable-background-timer-throttling",
    "--disable-backgrounding-occluded-windows",
    "--disable-breakpad",
    "--disable-client-side-phishing-detection",
    "--disable-component-update",
    "--disable-default-apps",
    "--disable-dev-shm-usage",
    "--disable-domain-reliability",
    "--disable-extensions",
    "--disable-features=AudioServiceOutOfProcess",
    "--disable-hang-monitor",
    "--disable-ipc-flooding-protection",
    "--disable-notifications",
    "--disable-offer-store-unmasked-wallet-cards",
    "--disable-popup-blocking",
    "--disable-print-preview",
    "--disable-prompt-on-repost",
    "--disable-renderer-backgrounding",
    "--disable-speech-api",
    "--disable-sync",
    "--hide-scrollbars",
    "--ignore-gpu-blocklist",
    "--metrics-recording-only",
    "--mute-audio",
    "--no-default-browser-check",
    "--no-first-run",
    "--no-pings",
    "--no-zygote",
    "--password-store=basic",
    "--use-gl=swiftshader",
    "--use-mock-keychain",
)

_SANDBOX_ARGS = ("--no-sandbox", "--disable-setuid-sandbox")

_DEFAULT_VIEWPORT = Viewport(width=1920, height=1080)

# Local Chrome installs used outside production, keyed by sys.platform
_LOCAL_CHROME_PATHS = {
    "win32": "C:\\Program Files\\Google\\Chrome\\Application\\chrome.exe",
    "darwin": "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
    "linux": "/usr/bin/google-chrome",
}


class BrowserProvisioner:
    def __init__(
        self,
        mode: Mode,
        platform: str = sys.platform,
        bundled_executable_path: str | None = None,
        headless: bool = True,
    ):
        self._mode = mode
        self._platform = platform
        self._bundled_executable_path = bundled_executable_path or None
        self._headless = headless

    def launch_config(self) -> LaunchConfig:
        """Resolve launch settings for the current mode and host platform.

        Raises UnsupportedPlatformError in development mode when no local
        Chrome location is known for the platform.
        """
        if self._mode == Mode.development:
            executable_path = self._local_executable_path()
            headless = True
        else:
            # None lets Playwright fall back to its bundled Chromium build
            executable_path = self._bundled_executable_path
            headless = self._headless

        logger.debug(
            "Launching Chromium for %s mode (executable=%s, headless=%s)",
            self._mode,
            executable_path or "bundled",
            headless,
        )
        return LaunchConfig(
            args=[*_BASE_ARGS, *_SANDBOX_ARGS],
            viewport=_DEFAULT_VIEWPORT.model_copy(),
            executable_path=executable_path,
            headless=headless,
        )

    def _local_executable_path(self) -> str:
        try:
            return _LOCAL_CHROME_PATHS[self._platform]
        except KeyError:
            raise UnsupportedPlatformError(self._platform) from None
