"""Analytics app package: occupancy, revenue and arrivals overview."""
