from dataclasses import dataclass, field


@dataclass(frozen=True)
class ModelProbe:
    """Outcome of a lightweight reachability check against the model endpoint."""

    reachable: bool
    provider: str
    model: str
    details: dict[str, object] = field(default_factory=dict)
    error: str = ""
