"""Terminal formatting helpers for the template approval CLI."""


class CLIFormatter:
    """Formats output for the CLI with colors."""

    # ANSI color codes
    RESET = "\033[0m"
    BOLD = "\033[1m"

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    RED = "\033[91m"

    @staticmethod
    def section(text: str) -> str:
        """Format a section title."""
        return f"\n{CLIFormatter.BOLD}{CLIFormatter.BLUE}► {text}{CLIFormatter.RESET}"

    @staticmethod
    def success(text: str) -> str:
        """Format a success message."""
        return f"{CLIFormatter.GREEN}{text}{CLIFormatter.RESET}"

    @staticmethod
    def warning(text: str) -> str:
        """Format a warning message."""
        return f"{CLIFormatter.YELLOW}⚠ {text}{CLIFormatter.RESET}"

    @staticmethod
    def error(text: str) -> str:
        """Format an error message."""
        return f"{CLIFormatter.RED}{text}{CLIFormatter.RESET}"

    @staticmethod
    def added(text: str) -> str:
        """Format lines added by a diff."""
        return f"{CLIFormatter.GREEN}{text}{CLIFormatter.RESET}"

    @staticmethod
    def removed(text: str) -> str:
        """Format lines removed by a diff."""
        return f"{CLIFormatter.RED}{text}{CLIFormatter.RESET}"
