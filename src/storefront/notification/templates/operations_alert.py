"""Tells the warehouse a new order needs packing."""

from storefront.notification.notification import NotificationKind
from storefront.notification.templates.order_confirmation import format_money


class OperationsAlertTemplate:
    kind = NotificationKind.OPERATIONS_ALERT.value

    @staticmethod
    def render(context: dict) -> dict:
        currency = context.get("currency", "VND")
        order_id = context.get("order_id", "N/A")
        items = "\n".join(
            f"- {line['name']} x{line['quantity']} = {format_money(line['line_total'], currency)}"
            for line in context.get("lines", [])
        )
        return {
            "subject": f"New order #{order_id}",
            "body": (
                f"Order #{order_id} was placed by {context.get('name', '')} ({context.get('phone', '')}).\n"
                f"Ship to: {context.get('address', '')}\n\n"
                f"{items}\n\n"
                f"Collect on delivery: {format_money(context.get('actual_value', 0) + context.get('fee_ship', 0), currency)}"
            ),
        }
