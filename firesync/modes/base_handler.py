"""Base mode handler with template method pattern."""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from colorama import Fore, Style

from ..services.firebase.sync_engine import FirebaseSyncService
from ..utils.logger import get_logger
from ..utils.validation import format_violation, validate_options

log = get_logger(__name__)


class ModeHandler(ABC):
    """Abstract base class for all mode handlers."""

    title = ""

    def __init__(self, context, target, options):
        """Initialize mode handler.

        Args:
            context: :class:`~firesync.context.SyncContext` shared by the run
            target: Name of the task target being run
            options: Resolved :class:`~firesync.models.SyncOptions`
        """
        self.context = context
        self.target = target
        self.options = options

    def execute(self) -> int:
        """Execute mode workflow (Template Method).

        Returns:
            Exit code (0 for success, 1 for failure)
        """
        self.display_banner()

        if not self.validate_prerequisites():
            return 1

        context = self.prepare_context()
        if context is None:
            return 1

        result = self.execute_workflow(context)

        if result:
            self.display_completion(result)

        return 0 if result else 1

    def display_banner(self):
        """Print the header for this target."""
        print(f"\n{Fore.CYAN}  ▸ {self.title} (firesync:{self.target}){Style.RESET_ALL}\n")

    def validate_prerequisites(self) -> bool:
        """Check the required options, reporting every missing one.

        Returns:
            True if all required options are set
        """
        violations = validate_options(self.options.to_dict())
        for violation in violations:
            log.warning(format_violation(violation))
        return not violations

    def prepare_context(self) -> Optional[Dict[str, Any]]:
        """Connect to the database and bind a sync service to the path.

        Connection errors propagate.
        """
        connection = self.context.connect(self.options.reference, self.options.credential)
        return {
            'connection': connection,
            'service': FirebaseSyncService(connection, self.options.path),
            'settings': self.options.settings(),
        }

    @abstractmethod
    def execute_workflow(self, context: Dict[str, Any]) -> Any:
        """Execute mode-specific workflow.

        Args:
            context: Prepared context dictionary

        Returns:
            Result object (mode-specific), or None/False if failed
        """
        pass

    def display_completion(self, result: Any):
        """Display completion message."""
        print(f"{Fore.GREEN}[SUCCESS] firesync:{self.target} complete{Style.RESET_ALL}")
