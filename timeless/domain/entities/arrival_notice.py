from dataclasses import dataclass


@dataclass(frozen=True)
class ArrivalNotice:
    title: str
    message: str
    reservation_ids: tuple[str, ...] = ()
