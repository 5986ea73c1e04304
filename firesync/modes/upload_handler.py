"""Handler for upload mode."""
from colorama import Fore, Style

from .base_handler import ModeHandler


class UploadHandler(ModeHandler):
    """Merges ``data`` and the target's files into the database path."""

    title = "Upload"

    def execute_workflow(self, context):
        settings = context['settings']
        return context['service'].upload(data=settings.data, files=settings.files)

    def display_completion(self, report):
        print(f"  Files uploaded : {len(report.uploaded)}")
        if report.skipped:
            print(f"  Files skipped  : {len(report.skipped)} (not found)")
        print(f"{Fore.GREEN}[SUCCESS] Uploaded to {self.options.path}{Style.RESET_ALL}")
