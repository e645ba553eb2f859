from typing import Iterable

from models.domain import HalalStatus


def aggregate_status(statuses: Iterable[HalalStatus]) -> HalalStatus:
    """Reduce per-ingredient statuses to the product status.

    Avoid beats Caution; OK only when every ingredient is OK. An empty list
    is Unknown.
    """
    seen = set(statuses)
    if HalalStatus.AVOID in seen:
        return HalalStatus.AVOID
    if HalalStatus.CAUTION in seen:
        return HalalStatus.CAUTION
    if seen == {HalalStatus.OK}:
        return HalalStatus.OK
    return HalalStatus.UNKNOWN
