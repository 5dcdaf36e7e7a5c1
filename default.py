class DEFAULT:
    risk_per_trade = 0.5
    risk_reward_ratio = 2
    account_balance = 0.0
    import_profile = "default"
    market_min_length = 2
    market_max_length = 10
    evaluation_grades = ("A+", "A", "B", "C")
