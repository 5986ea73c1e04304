"""Handler for live mode.

Runs until the process is interrupted. ``KeyboardInterrupt`` is left to the
CLI so the remaining targets of the run are not started.
"""
from .base_handler import ModeHandler
from ..exceptions import WatchSetupError
from ..services.firebase.live import LiveSync
from ..utils.logger import get_logger

log = get_logger(__name__)


class LiveHandler(ModeHandler):
    """Keeps the target's files and the database path in sync."""

    title = "Live"

    def build_live_sync(self, context):
        settings = context['settings']
        return LiveSync(context['service'].ref(), settings.files, settings.poll_interval)

    def execute_workflow(self, context):
        live = self.build_live_sync(context)
        try:
            live.run()
        except WatchSetupError as e:
            log.warning("Error attempting to watch file: %s (%s)", ", ".join(live.files), e)
            return False
        return True

    def display_completion(self, result):
        print("Live sync stopped.")
