"""Financial ratios and health indicators.

Every ratio is a pure function of totals that have already been computed.
A zero denominator yields 0 rather than NaN, infinity or an exception.
"""

from dataclasses import dataclass
from typing import Optional

from contabil.domain.entities import HealthIndicator, HealthStatus

# Commercial year used by the average-term indicators
DAYS_PER_YEAR = 360


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0 when the denominator is 0."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def percent_of(value: float, base: float) -> float:
    """Return value as a percentage of base (0 when base is 0)."""
    return safe_divide(value, base) * 100


def growth(current: float, previous: Optional[float]) -> Optional[float]:
    """Return month-over-month growth in percent.

    Measured against the magnitude of the previous value so that a loss
    shrinking reads as positive growth. None when there is nothing to compare.
    """
    if previous is None or previous == 0:
        return None
    return (current - previous) / abs(previous) * 100


def current_liquidity(current_assets: float, current_liabilities: float) -> float:
    return safe_divide(current_assets, current_liabilities)


def indebtedness(current_liabilities: float, non_current_liabilities: float, total_assets: float) -> float:
    """Third-party capital as a percentage of total assets."""
    return percent_of(current_liabilities + non_current_liabilities, total_assets)


def asset_turnover(net_revenue: float, total_assets: float) -> float:
    return safe_divide(net_revenue, total_assets)


def return_on_assets(net_result: float, total_assets: float) -> float:
    return percent_of(net_result, total_assets)


def return_on_equity(net_result: float, equity: float) -> float:
    return percent_of(net_result, equity)


def gross_margin(gross_profit: float, net_revenue: float) -> float:
    return percent_of(gross_profit, net_revenue)


def net_margin(net_result: float, gross_revenue: float) -> float:
    return percent_of(net_result, gross_revenue)


def ebitda_margin(ebitda: float, net_revenue: float) -> float:
    return percent_of(ebitda, net_revenue)


def immediate_liquidity(cash: float, current_liabilities: float) -> float:
    return safe_divide(cash, current_liabilities)


def quick_liquidity(current_assets: float, inventory: float, current_liabilities: float) -> float:
    """Current assets net of inventory over current liabilities."""
    return safe_divide(current_assets - inventory, current_liabilities)


def general_liquidity(total_assets: float, total_liabilities: float) -> float:
    """Total assets over current plus non-current liabilities."""
    return safe_divide(total_assets, total_liabilities)


def return_on_invested_capital(pre_tax_result: float, total_assets: float) -> float:
    return percent_of(pre_tax_result, total_assets)


def inventory_turnover(costs: float, inventory: float) -> float:
    """Times the inventory is sold through in the period's costs."""
    return safe_divide(abs(costs), inventory)


def days_of_inventory(turnover: float) -> float:
    return safe_divide(DAYS_PER_YEAR, turnover)


def days_sales_outstanding(receivables: float, net_revenue: float) -> float:
    """Average collection period (PMC) in days."""
    return safe_divide(receivables, abs(net_revenue)) * DAYS_PER_YEAR


def days_payable_outstanding(suppliers: float, costs: float) -> float:
    """Average payment period (PMP) in days."""
    return safe_divide(suppliers, abs(costs)) * DAYS_PER_YEAR


def cash_cycle(collection_days: float, payment_days: float) -> float:
    """Days between paying suppliers and collecting from customers."""
    return collection_days - payment_days


@dataclass(frozen=True)
class Threshold:
    """Two cut points separating red, yellow and green."""

    low: float
    high: float
    higher_is_better: bool = True

    def status(self, value: float) -> HealthStatus:
        if self.higher_is_better:
            if value >= self.high:
                return HealthStatus.GREEN
            if value >= self.low:
                return HealthStatus.YELLOW
            return HealthStatus.RED
        if value <= self.low:
            return HealthStatus.GREEN
        if value <= self.high:
            return HealthStatus.YELLOW
        return HealthStatus.RED


HEALTH_THRESHOLDS: dict[str, tuple[str, Threshold]] = {
    "current_liquidity": ("Liquidez Corrente", Threshold(1.0, 1.5)),
    "net_margin": ("Margem Líquida", Threshold(5, 10)),
    "ebitda_margin": ("Margem EBITDA", Threshold(8, 15)),
    "indebtedness": ("Endividamento", Threshold(40, 60, higher_is_better=False)),
}


def assess(ratios: dict[str, float]) -> tuple[HealthIndicator, ...]:
    """Grade the ratios that have a health threshold."""
    indicators = []
    for name, (label, threshold) in HEALTH_THRESHOLDS.items():
        if name not in ratios:
            continue
        value = ratios[name]
        indicators.append(
            HealthIndicator(name=name, label=label, value=value, status=threshold.status(value))
        )
    return tuple(indicators)
