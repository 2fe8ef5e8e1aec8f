"""Core data types for phonodist."""

from dataclasses import dataclass

SAME = "same"
INSERT = "insert"
DELETE = "delete"
SUBSTITUTE = "substitute"

OPERATIONS = (SAME, INSERT, DELETE, SUBSTITUTE)


@dataclass
class AlignmentStep:
    """One step of a reconstructed alignment."""
    operation: str          # one of OPERATIONS
    cost: float             # cumulative matrix value at this step
    row: int                # matrix row (prefix length of sequence 2)
    column: int             # matrix column (prefix length of sequence 1)
    source: str | None      # symbol of sequence 1 consumed, if any
    target: str | None      # symbol of sequence 2 consumed, if any

    def to_dict(self) -> dict:
        return {
            "operation": self.operation,
            "cost": self.cost,
            "row": self.row,
            "column": self.column,
            "source": self.source,
            "target": self.target,
        }
