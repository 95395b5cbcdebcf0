class TradeNotFoundError(Exception):
    def __init__(self, trade_id: str):
        super().__init__(f"Trade {trade_id} not found")
        self.trade_id = trade_id


class AccountNotFoundError(Exception):
    def __init__(self, account_id: str):
        super().__init__(f"Account {account_id} not found")
        self.account_id = account_id


class StrategyNotFoundError(Exception):
    def __init__(self, strategy_id: str):
        super().__init__(f"Strategy {strategy_id} not found")
        self.strategy_id = strategy_id
