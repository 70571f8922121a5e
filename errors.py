"""
Error conditions raised by the distance-vector simulator.
"""


class TopologyParseError(ValueError):
    """Malformed line in a topology script."""

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        super().__init__(f"line {line_number}: {reason}: {line!r}")
        self.line_number = line_number
        self.line = line
        self.reason = reason


class InvalidReferenceError(ValueError):
    """A link names a node that was never declared."""

    def __init__(self, node: str) -> None:
        super().__init__(f"Unknown node '{node}'; declare it before linking it.")
        self.node = node


class InvalidLinkError(ValueError):
    """A link is meaningless (self-link) or carries an invalid cost."""


class NonConvergenceError(RuntimeError):
    """The round loop hit its cap without reaching a stable table."""

    def __init__(self, rounds: int) -> None:
        super().__init__(f"Distance tables did not converge within {rounds} rounds.")
        self.rounds = rounds
