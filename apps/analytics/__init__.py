"""Analytics app package: administrator dashboard, revenue reports and data export."""
