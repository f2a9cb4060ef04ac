import unittest
from dataclasses import replace

from simulator.kpi.parameters import DEFAULT_PARAMETERS, BusinessParameters
from simulator.kpi.engine import compute, metric_deltas, safe_div, METRIC_FIELDS


class TestKPIEngine(unittest.TestCase):
    def test_reference_scenario(self):
        k = compute(DEFAULT_PARAMETERS)
        self.assertAlmostEqual(k.sales, 5_000_000)
        self.assertAlmostEqual(k.cogs, 2_850_000)
        self.assertAlmostEqual(k.gross_margin, 0.43)
        self.assertAlmostEqual(k.opex, 800_000)
        self.assertAlmostEqual(k.ebit, 1_350_000)
        self.assertAlmostEqual(k.operating_margin, 0.27)
        self.assertEqual(k.cash_conversion_cycle, 70)
        self.assertAlmostEqual(k.net_profit, 1_012_500)

    def test_working_capital_from_days(self):
        k = compute(DEFAULT_PARAMETERS)
        self.assertAlmostEqual(k.inventory_value, 2_850_000 / 365 * 60)
        self.assertAlmostEqual(k.receivables_value, 5_000_000 / 365 * 45)
        self.assertAlmostEqual(k.payables_value, 2_850_000 / 365 * 35)
        self.assertAlmostEqual(k.working_capital, k.inventory_value + k.receivables_value - k.payables_value)
        self.assertAlmostEqual(k.total_investment, 2_000_000 + k.working_capital)
        self.assertAlmostEqual(k.roi, k.net_profit / k.total_investment)

    def test_deterministic(self):
        self.assertEqual(compute(DEFAULT_PARAMETERS), compute(DEFAULT_PARAMETERS))

    def test_margin_identities(self):
        samples = [
            DEFAULT_PARAMETERS,
            replace(DEFAULT_PARAMETERS, annual_sales=750_000.0, raw_material_pct=55.0, opex_pct=40.0),
            replace(DEFAULT_PARAMETERS, annual_sales=12_345_678.0, labor_pct=0.0, logistics_pct=24.5),
        ]
        for p in samples:
            k = compute(p)
            self.assertAlmostEqual(k.gross_margin * k.sales, k.sales - k.cogs, places=4)
            self.assertAlmostEqual(k.operating_margin * k.sales, k.ebit, places=4)
            self.assertEqual(k.cash_conversion_cycle, p.inventory_days + p.receivable_days - p.payable_days)

    def test_total_investment_never_negative(self):
        p = replace(DEFAULT_PARAMETERS, inventory_days=0, receivable_days=0, payable_days=1000, fixed_assets=0.0)
        k = compute(p)
        self.assertLess(k.working_capital, 0)
        self.assertEqual(k.total_investment, 0.0)
        self.assertEqual(k.roi, 0.0)

    def test_zero_sales_ratios_are_zero(self):
        k = compute(replace(DEFAULT_PARAMETERS, annual_sales=0.0))
        self.assertEqual(k.cogs, 0.0)
        self.assertEqual(k.gross_margin, 0.0)
        self.assertEqual(k.operating_margin, 0.0)
        self.assertEqual(k.net_profit, 0.0)
        self.assertEqual(k.roi, 0.0)
        self.assertAlmostEqual(k.total_investment, 2_000_000)

    def test_safe_div(self):
        self.assertEqual(safe_div(1, 0), 0.0)
        self.assertEqual(safe_div(1, None), 0.0)
        self.assertAlmostEqual(safe_div(1, 4), 0.25)

    def test_metric_deltas_ratio_in_pp(self):
        base = compute(DEFAULT_PARAMETERS)
        tuned = compute(replace(DEFAULT_PARAMETERS, raw_material_pct=30.0))
        d = metric_deltas(base, tuned)
        self.assertEqual(set(d), set(METRIC_FIELDS))
        self.assertAlmostEqual(d["gross_margin"], 2.0)
        self.assertAlmostEqual(d["operating_margin"], 2.0)
        self.assertAlmostEqual(d["ebit"], 100_000)
        self.assertEqual(d["cash_conversion_cycle"], 0)


if __name__ == "__main__":
    unittest.main()
