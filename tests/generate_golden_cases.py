"""
Generate golden test cases by running the current engine on sample scenarios.
This captures current behavior as a regression baseline.
"""
import os
import sys

import pandas as pd

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from discount_tool.engine import PricingInput, compute

# (case, mode, input overrides)
SCENARIOS = [
    ('price_percent', 'PRICE', dict(original_price=100, discount_value=20)),
    ('price_percent_coupon', 'PRICE', dict(original_price=100, discount_value=20, additional_coupon=10)),
    ('price_fixed_tax_shipping', 'PRICE', dict(original_price=50, discount_value=15, discount_type='fixed',
                                               quantity=2, tax_rate=10, shipping_cost=5)),
    ('price_fixed_floor', 'PRICE', dict(original_price=10, discount_value=25, discount_type='fixed')),
    ('bogo_three_units', 'PRICE', dict(original_price=20, discount_value=0, quantity=3, deal_type='bogo')),
    ('b2g1_six_units', 'PRICE', dict(original_price=9, discount_value=0, quantity=6, deal_type='b2g1')),
    ('b2g1_four_units_tax_shipping', 'PRICE', dict(original_price=30, discount_value=0, quantity=4,
                                                   tax_rate=5, shipping_cost=10, deal_type='b2g1')),
    ('discount_rate', 'DISCOUNT', dict(original_price=80, discount_value=0, quantity=2, target_price=60)),
    ('discount_paid_more', 'DISCOUNT', dict(original_price=10, discount_value=0, target_price=15)),
    ('original_percent', 'ORIGINAL', dict(original_price=0, discount_value=20, target_price=80)),
    ('original_fixed_tax', 'ORIGINAL', dict(original_price=0, discount_value=15, discount_type='fixed',
                                            quantity=3, tax_rate=10, target_price=45)),
    ('original_full_discount', 'ORIGINAL', dict(original_price=0, discount_value=100, target_price=30)),
]


def generate_golden_cases():
    cases = []
    for case, mode, overrides in SCENARIOS:
        pricing_input = PricingInput(**overrides)
        result = compute(pricing_input, mode)
        row = {'case': case, 'mode': mode}
        row.update(pricing_input.to_dict())
        row.pop('currency')
        row.pop('item_name')
        for name in result.NUMERIC_FIELDS:
            row[f'expected_{name}'] = round(getattr(result, name), 4)
        cases.append(row)

    # Write to CSV
    df = pd.DataFrame(cases)
    output_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'golden_cases.csv')
    df.to_csv(output_path, index=False)
    print(f"Generated {len(cases)} golden test cases")
    print(f"Output: {output_path}")
    print()
    print(df.to_string(index=False))


if __name__ == "__main__":
    generate_golden_cases()
