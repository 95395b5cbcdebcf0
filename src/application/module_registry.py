from fastapi import FastAPI
from dependency_injector import providers
from src.application.container import container as root_container


def _root_dependencies() -> providers.DependenciesContainer:
    return providers.DependenciesContainer(
        db_client=root_container.db_client,
        config=root_container.config,
    )


def register_modules(app: FastAPI, prefix: str = ""):
    # Health
    from src.domain.health.module import HealthModule
    from src.domain.health.controller import router as health_router

    health_module = HealthModule(root=_root_dependencies())
    health_module.wire(modules=["src.domain.health.controller"])
    app.include_router(health_router)
    app.state.health_module = health_module

    # Accounts
    from src.domain.accounts.accounts_module import AccountsModule
    from src.domain.accounts.controller import router as accounts_router

    accounts_module = AccountsModule(
        root=providers.DependenciesContainer(db_client=root_container.db_client),
    )
    accounts_module.wire(modules=["src.domain.accounts.controller"])
    app.include_router(accounts_router, prefix=prefix)
    app.state.accounts_module = accounts_module

    # Strategies
    from src.domain.strategies.strategies_module import StrategiesModule
    from src.domain.strategies.controller import router as strategies_router

    strategies_module = StrategiesModule(
        root=providers.DependenciesContainer(db_client=root_container.db_client),
    )
    strategies_module.wire(modules=["src.domain.strategies.controller"])
    app.include_router(strategies_router, prefix=prefix)
    app.state.strategies_module = strategies_module

    # Trades
    from src.domain.trades.trades_module import TradesModule
    from src.domain.trades.controller import router as trades_router

    trades_module = TradesModule(root=_root_dependencies())
    trades_module.wire(modules=["src.domain.trades.controller"])
    app.include_router(trades_router, prefix=prefix)
    app.state.trades_module = trades_module

    # Analytics
    from src.domain.analytics.analytics_module import AnalyticsModule
    from src.domain.analytics.controller import router as analytics_router

    analytics_module = AnalyticsModule(root=_root_dependencies())
    analytics_module.wire(modules=["src.domain.analytics.controller"])
    app.include_router(analytics_router, prefix=prefix)
    app.state.analytics_module = analytics_module

    # Calculator
    from src.domain.calculator.calculator_module import CalculatorModule
    from src.domain.calculator.controller import router as calculator_router

    calculator_module = CalculatorModule(
        root=providers.DependenciesContainer(db_client=root_container.db_client),
    )
    calculator_module.wire(modules=["src.domain.calculator.controller"])
    app.include_router(calculator_router, prefix=prefix)
    app.state.calculator_module = calculator_module
