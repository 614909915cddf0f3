"""
Registration report for audit and downstream tooling.

Every accepted scanner-to-base edge is recorded with the transform that
based the scanner and the votes that accepted it. A failed run keeps the
indices that could not be based, so a partial merge is never mistaken for a
complete one.
"""

import json
import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class EdgeRecord:
    """
    One accepted registration.

    Attributes:
        scanner: Index of the scanner that was based
        base: Index of the already-based scanner it matched against
        rotation: Rotation applied, rendered as text (e.g. "X<>Z +-+")
        displacement: Displacement applied; also the scanner position
        votes: Votes collected by the accepted hypothesis
        round: Accumulation round (1-based) in which the match was found
    """
    scanner: int
    base: int
    rotation: str
    displacement: tuple[int, int, int]
    votes: int
    round: int

    def to_dict(self) -> dict:
        return {
            "scanner": self.scanner,
            "base": self.base,
            "rotation": self.rotation,
            "displacement": list(self.displacement),
            "votes": self.votes,
            "round": self.round,
        }


@dataclass
class RegistrationReport:
    """
    Summary of one base-frame accumulation run.

    Attributes:
        n_scanners: Number of scanners in the input
        min_overlap: Vote threshold used
        edges: Accepted registrations in the order they were applied
        rounds: Accumulation rounds executed (including the final empty one)
        unbased: Scanner indices left unbased (non-empty means failure)
        n_beacons: Distinct beacons after merging (None until merged)
        max_scanner_distance: Largest taxicab distance between scanner positions
        timestamp: When the report was generated
    """
    n_scanners: int
    min_overlap: int
    edges: list[EdgeRecord] = field(default_factory=list)
    rounds: int = 0
    unbased: list[int] = field(default_factory=list)
    n_beacons: Optional[int] = None
    max_scanner_distance: Optional[int] = None
    timestamp: float = field(default_factory=time.time)

    @property
    def complete(self) -> bool:
        return not self.unbased

    def validate(self) -> None:
        """
        Check the report is internally consistent.

        Raises ValueError if validation fails.
        """
        based = [edge.scanner for edge in self.edges]
        if len(set(based)) != len(based):
            raise ValueError(f"Scanner based more than once: {based}")
        if set(based) & set(self.unbased):
            raise ValueError("Scanner reported as both based and unbased.")
        if len(based) + len(self.unbased) + 1 != self.n_scanners:
            raise ValueError(
                f"{len(based)} based + {len(self.unbased)} unbased + origin "
                f"!= {self.n_scanners} scanners"
            )
        if self.n_beacons is not None and self.unbased:
            raise ValueError("Incomplete registration must not report a merged beacon count.")

    def to_dict(self) -> dict:
        return {
            "n_scanners": self.n_scanners,
            "min_overlap": self.min_overlap,
            "edges": [edge.to_dict() for edge in self.edges],
            "rounds": self.rounds,
            "unbased": list(self.unbased),
            "complete": self.complete,
            "n_beacons": self.n_beacons,
            "max_scanner_distance": self.max_scanner_distance,
            "timestamp": self.timestamp,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)
