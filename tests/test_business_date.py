import unittest
from datetime import date, timedelta

from bnm_rates_bot.utils.business_date import (
    format_bnm_date,
    parse_bnm_date,
    previous_business_date,
    resolve_business_date,
)


class BusinessDateTests(unittest.TestCase):
    def test_weekdays_are_unchanged(self) -> None:
        monday = date(2024, 3, 4)
        for offset in range(5):
            day = monday + timedelta(days=offset)
            self.assertEqual(resolve_business_date(day), day)

    def test_saturday_rolls_back_one_day(self) -> None:
        self.assertEqual(resolve_business_date(date(2024, 3, 9)), date(2024, 3, 8))

    def test_sunday_rolls_back_two_days(self) -> None:
        self.assertEqual(resolve_business_date(date(2024, 3, 10)), date(2024, 3, 8))

    def test_weekend_rule_over_a_whole_year(self) -> None:
        day = date(2023, 1, 1)
        while day.year == 2023:
            resolved = resolve_business_date(day)
            expected_delta = {5: 1, 6: 2}.get(day.weekday(), 0)
            self.assertEqual(day - resolved, timedelta(days=expected_delta))
            self.assertLess(resolved.weekday(), 5)
            day += timedelta(days=1)

    def test_previous_business_date(self) -> None:
        # Wednesday -> Tuesday
        self.assertEqual(previous_business_date(date(2024, 3, 6)), date(2024, 3, 5))
        # Monday -> Friday
        self.assertEqual(previous_business_date(date(2024, 3, 11)), date(2024, 3, 8))
        # Saturday and Sunday resolve to Friday, so yesterday is Thursday
        self.assertEqual(previous_business_date(date(2024, 3, 9)), date(2024, 3, 7))
        self.assertEqual(previous_business_date(date(2024, 3, 10)), date(2024, 3, 7))

    def test_bnm_date_text(self) -> None:
        self.assertEqual(format_bnm_date(date(2024, 1, 5)), "05.01.2024")
        self.assertEqual(parse_bnm_date("05.01.2024"), date(2024, 1, 5))
        self.assertEqual(parse_bnm_date(date(2024, 1, 5)), date(2024, 1, 5))
        with self.assertRaises(ValueError):
            parse_bnm_date("2024-01-05")


if __name__ == "__main__":
    unittest.main()
