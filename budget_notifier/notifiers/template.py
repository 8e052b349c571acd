"""Budget alert message template."""

from budget_notifier.schemas import BudgetAlert


class BudgetAlertTemplate:
    """Format budget alerts into chat messages."""

    TEXT = "[{name}] {interval} 予算({budget:.0f}円)の{percent:.0f}%に達しました。現在の利用額: {cost:.0f}円"

    @staticmethod
    def format_text(alert: BudgetAlert) -> str:
        """Format alert as a single line of plain text."""
        return BudgetAlertTemplate.TEXT.format(
            name=alert.budget_display_name,
            interval=alert.cost_interval_start.strftime("%Y年%m月"),
            budget=alert.budget_amount,
            percent=alert.alert_threshold_exceeded * 100,
            cost=alert.cost_amount,
        )
