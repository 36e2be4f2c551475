"""
Notifications - Operator alerts for feed updates and acquisition errors.

One Notifier interface, one backend chosen at startup:
- NotifySendNotifier: desktop notification via the notify-send command
- LogNotifier: writes the notification to the log (headless hosts, tests)

Usage:
    notifier = get_notifier()
    notify_update(notifier, 1, 3, feed, jump=2.4)
"""
import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Tuple

from .. import config as runtime
from ..constants import FEED_PAGE_PATH
from ..scrapers.models import Feed

logger = logging.getLogger(__name__)

NOTIFY_SEND_TIMEOUT_SECONDS = 10


class NotificationKind(Enum):
    """Notification type, valued by its freedesktop icon name."""
    UPDATE = "emblem-sound"
    ERROR = "dialog-error"


class NotifyError(Exception):
    """A notification could not be delivered."""
    pass


class Notifier(ABC):
    """Delivers a titled notification to the operator."""

    @abstractmethod
    def notify(self, kind: NotificationKind, title: str, body: str) -> None:
        """
        Show a notification.

        Raises:
            NotifyError: If the backend fails to deliver it.
        """
        pass


class LogNotifier(Notifier):
    """Writes notifications to the log."""

    def notify(self, kind: NotificationKind, title: str, body: str) -> None:
        level = logging.ERROR if kind is NotificationKind.ERROR else logging.INFO
        logger.log(level, f"{title}\n{body}")


class NotifySendNotifier(Notifier):
    """Desktop notifications through the freedesktop notify-send command."""

    def __init__(self, command: str = "notify-send"):
        self.command = command

    def notify(self, kind: NotificationKind, title: str, body: str) -> None:
        try:
            result = subprocess.run(
                [self.command, "--icon", kind.value, title, body],
                capture_output=True,
                text=True,
                timeout=NOTIFY_SEND_TIMEOUT_SECONDS,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise NotifyError(f"failed to create notification: {e}") from e

        if result.returncode != 0:
            raise NotifyError(f"failed to create notification: {result.stderr.strip()}")


def get_notifier() -> Notifier:
    """Backend for this host: notify-send when installed, else the log."""
    if shutil.which("notify-send"):
        return NotifySendNotifier()
    logger.info("notify-send not found, notifications go to the log")
    return LogNotifier()


# =============================================================================
# Message formats
# =============================================================================

def format_update(
    index: int,
    total: int,
    feed: Feed,
    jump: float,
    base_url: Optional[str] = None,
) -> Tuple[str, str]:
    """
    Title and body for a feed update notification.

    Args:
        index: Position of this feed in the batch (1-based)
        total: Number of feeds in the batch
        feed: Feed being reported
        jump: Listener jump reported by the statistics engine
        base_url: Site root for the feed link, defaults to FEEDWATCH_BASE_URL
    """
    base_url = (base_url or runtime.get_base_url()).rstrip("/")
    title = f"{feed.state.abbreviation} - Broadcastify Update ({index} of {total})"

    alert = f"\nAlert: {feed.alert}" if feed.alert is not None else ""
    link = f"{base_url}{FEED_PAGE_PATH.format(feed_id=feed.id)}"
    body = (
        f"Name: {feed.name}\n"
        f"Listeners: {feed.listeners} (^{int(jump)}){alert}\n"
        f"Link: {link}"
    )
    return title, body


def format_error(body: str) -> Tuple[str, str]:
    return "Broadcastify Update Error", body


def notify_update(notifier: Notifier, index: int, total: int, feed: Feed, jump: float) -> None:
    title, body = format_update(index, total, feed, jump)
    notifier.notify(NotificationKind.UPDATE, title, body)


def notify_error(notifier: Notifier, body: str) -> None:
    title, body = format_error(body)
    notifier.notify(NotificationKind.ERROR, title, body)
