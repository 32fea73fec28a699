"""Scenarios for generating realistic small-business data sets."""

from cashpilot.config import ScenarioConfig
from cashpilot.exceptions import ConfigurationError
from cashpilot.scenarios.base import BaseScenario
from cashpilot.scenarios.distressed import DistressedBusinessScenario
from cashpilot.scenarios.ecommerce import EcommerceScenario
from cashpilot.scenarios.subscription import SubscriptionBusinessScenario

SCENARIOS: dict[str, type[BaseScenario]] = {
    SubscriptionBusinessScenario.name: SubscriptionBusinessScenario,
    EcommerceScenario.name: EcommerceScenario,
    DistressedBusinessScenario.name: DistressedBusinessScenario,
}


def build_scenario(config: ScenarioConfig) -> BaseScenario:
    """Instantiate the scenario named in ``config``."""
    try:
        scenario_cls = SCENARIOS[config.name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown scenario {config.name!r}, expected one of {', '.join(SCENARIOS)}"
        ) from None
    return scenario_cls(
        months=config.months,
        num_customers=config.num_customers,
        start_date=config.start_date,
        seed=config.seed,
    )


__all__ = [
    "BaseScenario",
    "DistressedBusinessScenario",
    "EcommerceScenario",
    "SCENARIOS",
    "SubscriptionBusinessScenario",
    "build_scenario",
]
