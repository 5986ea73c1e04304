"""Handler for download mode."""
from colorama import Fore, Style

from .base_handler import ModeHandler


class DownloadHandler(ModeHandler):
    """Writes the value at the database path to a local JSON file."""

    title = "Download"

    def execute_workflow(self, context):
        settings = context['settings']
        return context['service'].download(dest=settings.dest, timeout=settings.timeout)

    def display_completion(self, output):
        print(f"{Fore.GREEN}[SUCCESS] Saved {output}{Style.RESET_ALL}")
