"""
Console display of tree statistics.
"""
from typing import Any, List, Tuple

from arktree.analysis.analyzer import TreeAnalysisResult


class Colors:
    """ANSI color codes for terminal output."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


class DisplayService:
    """
    Formats generation progress and branch statistics for the terminal.
    """
    Colors = Colors

    def __init__(self, use_color: bool = True, width: int = 60):
        self.use_color = use_color
        self.width = width

    def colored(self, text: str, color: str, bold: bool = False) -> str:
        """Apply color to text."""
        if not self.use_color:
            return text
        style = Colors.BOLD if bold else ""
        return f"{style}{color}{text}{Colors.RESET}"

    def print_header(self, title: str, char: str = "=") -> None:
        print(self.colored(char * self.width, Colors.CYAN))
        print(self.colored(f" {title} ".center(self.width), Colors.CYAN, bold=True))
        print(self.colored(char * self.width, Colors.CYAN))

    def print_subheader(self, title: str, char: str = "─") -> None:
        print(f"\n{self.colored(char * self.width, Colors.GRAY)}")
        print(self.colored(title, Colors.WHITE, bold=True))
        print(self.colored(char * self.width, Colors.GRAY))

    def step(self, message: str) -> None:
        """Print a progress step, completed by done()."""
        print(f"{message}... ", end="", flush=True)

    def done(self, detail: str = "") -> None:
        suffix = f" ({detail})" if detail else ""
        print(self.colored("✓", Colors.GREEN) + suffix)

    def error(self, message: str) -> str:
        return self.colored(f"Error: {message}", Colors.RED)

    # --- Tree statistics ---

    def display_tree_statistics(self, result: TreeAnalysisResult) -> None:
        """Totals and central tendency of branch sizes."""
        self.print_subheader("TREE STATISTICS")
        sizes = result.size_summary
        print(f"  {'Total Transactions:':<24} {result.total_nodes:>8d}")
        print(f"  {'Number of Leaves:':<24} {result.leaf_count:>8d}")
        print(f"  {'Biggest Branch Size:':<24} {result.biggest_branch:>8d} tx")
        if sizes.count > 0:
            print(f"  {'Average Branch Size:':<24} {sizes.mean:>8.1f} tx")
            print(f"  {'Median Branch Size:':<24} {sizes.median:>8.1f} tx")

        weights = result.weight_summary
        if weights is not None and weights.count > 0:
            print(f"  {'Biggest Branch Weight:':<24} {weights.maximum:>8.2f}")
            print(f"  {'Average Branch Weight:':<24} {weights.mean:>8.2f}")
            print(f"  {'Median Branch Weight:':<24} {weights.median:>8.2f}")

    def display_branch_details(self, result: TreeAnalysisResult) -> None:
        """Branches grouped by size, ascending."""
        self.print_subheader("BRANCH DETAILS")
        for line in self.format_distribution(result.size_summary.distribution, "{:2d} tx"):
            print(f"  {line}")

    def display_weight_details(self, result: TreeAnalysisResult) -> None:
        """Branches grouped by broadcast weight (2 decimals), ascending."""
        if result.weight_summary is None:
            return
        self.print_subheader("BROADCAST WEIGHTS")
        for line in self.format_distribution(result.weight_summary.distribution, "weight {:.2f}"):
            print(f"  {line}")

    def display_result(self, result: TreeAnalysisResult) -> None:
        self.display_tree_statistics(result)
        self.display_branch_details(result)
        self.display_weight_details(result)

    @staticmethod
    def format_distribution(distribution: List[Tuple[Any, int]], value_format: str) -> List[str]:
        lines = []
        for value, count in distribution:
            noun = "branch  with" if count == 1 else "branches with"
            lines.append(f"{count:2d} {noun} {value_format.format(value)}")
        return lines
