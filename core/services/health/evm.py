from __future__ import annotations

from core.services.health.models import EvmMetrics
from core.services.health.policy import DEFAULT_AC_OVERRUN_FACTOR


def compute_evm(
    bac: float,
    avg_actual: float,
    avg_planned: float,
    *,
    ac_overrun_factor: float = DEFAULT_AC_OVERRUN_FACTOR,
) -> EvmMetrics:
    """
    Earned value indices and forecasts from a budget baseline and progress averages.

    - PV/EV: BAC scaled by planned/actual progress.
    - AC: BAC * min(1, actual * overrun factor). There is no dated actual-cost feed,
      so actual cost is approximated from earned progress.
    - Every ratio has a fixed fallback when its denominator is not positive,
      so SPI, CPI and TCPI are always finite.
    """
    PV = bac * avg_planned
    EV = bac * avg_actual
    AC = bac * min(1.0, avg_actual * ac_overrun_factor)

    SPI = (EV / PV) if PV > 0 else 0.0
    CPI = (EV / AC) if AC > 0 else 0.0

    schedule_variance = EV - PV
    cost_variance = EV - AC

    EAC = (bac / CPI) if (CPI > 0 and CPI != 1) else bac
    ETC = max(0.0, EAC - AC)
    VAC = bac - EAC

    remaining_work = bac - EV
    remaining_budget = bac - AC
    if remaining_work > 0 and remaining_budget > 0:
        TCPI = remaining_work / remaining_budget
    else:
        TCPI = 1.0

    return EvmMetrics(
        bac=float(bac),
        pv=float(PV),
        ev=float(EV),
        ac=float(AC),
        spi=float(SPI),
        cpi=float(CPI),
        schedule_variance=float(schedule_variance),
        cost_variance=float(cost_variance),
        eac=float(EAC),
        etc=float(ETC),
        vac=float(VAC),
        tcpi=float(TCPI),
    )


__all__ = ["compute_evm"]
