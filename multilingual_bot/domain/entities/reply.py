from dataclasses import dataclass


@dataclass(frozen=True)
class Reply:
    text: str
    suggested_actions: tuple[str, ...] = ()
