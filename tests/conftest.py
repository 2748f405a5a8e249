import sys
import os
import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from pricer.config.settings import reset_settings
from pricer.engine import AppliedMultiplier, MultiplierType, Product, QuoteItem


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Each test starts from default settings, whatever the shell environment holds."""
    for name in ('PRICER_TAX_RATE', 'PRICER_DISCOUNT_RATE', 'PRICER_CURRENCY', 'PRICER_PROJECT_ROOT',
                 'PRICER_HOST', 'PRICER_PORT', 'PRICER_RELOAD',
                 'PRICER_LOG_LEVEL', 'PRICER_EXPORT_DIR'):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def widget():
    return Product(id="widget", name="Widget", base_price=100.0)


@pytest.fixture
def rush():
    return AppliedMultiplier(
        multiplier_id="rush", name="Rush", type=MultiplierType.PERCENTAGE, applied_value=10.0
    )


@pytest.fixture
def delivery():
    return AppliedMultiplier(
        multiplier_id="delivery", name="Delivery", type=MultiplierType.FIXED_PER_UNIT,
        applied_value=5.0, is_discountable=False
    )


@pytest.fixture
def rush_line(widget, rush):
    """basePrice 100, qty 2, 10% rush on both units."""
    return QuoteItem(
        product=widget,
        quantity=2,
        applied_multipliers=(rush,),
        partial_multiplier_quantities={"rush": 2},
    )
