from datetime import date

from bnm_rates_bot import (
    BNMRatesClient,
    LanguageTag,
    format_comparison,
    format_single,
    previous_business_date,
    resolve_business_date,
)
from bnm_rates_bot.utils.business_date import format_bnm_date

client = BNMRatesClient(timeout=10)

# Today's business date (weekends roll back to Friday)
today = format_bnm_date(resolve_business_date(date.today()))
print(format_single(client.fetch(today), today, LanguageTag.EN))

# Compare with the previous business day
yesterday = format_bnm_date(previous_business_date(date.today()))
print(
    format_comparison(
        client.fetch(today),
        client.fetch(yesterday),
        today,
        yesterday,
        LanguageTag.RU,
    )
)
