"""Order confirmation sent to the buyer."""

from storefront.notification.notification import NotificationKind


def format_money(amount, currency) -> str:
    return f"{amount:,.0f} {currency}"


class OrderConfirmationTemplate:
    kind = NotificationKind.ORDER_CONFIRMATION.value

    @staticmethod
    def render(context: dict) -> dict:
        currency = context.get("currency", "VND")
        order_id = context.get("order_id", "N/A")

        line_rows = [
            f"- {line['name']} x{line['quantity']} @ {format_money(line['unit_price'], currency)}"
            f" = {format_money(line['line_total'], currency)}"
            for line in context.get("lines", [])
        ]

        summary = [
            f"Order value: {format_money(context.get('value', 0), currency)}",
            f"Shipping fee: {format_money(context.get('fee_ship', 0), currency)}",
            f"Amount due: {format_money(context.get('actual_value', 0) + context.get('fee_ship', 0), currency)}",
        ]
        if context.get("point_used"):
            summary.append(f"Points used: {context['point_used']}")
        if context.get("point_earned"):
            summary.append(f"Points earned: {context['point_earned']}")
        if context.get("promotion_code"):
            summary.append(f"Promotion: {context['promotion_code']}")

        return {
            "subject": f"Order #{order_id} Confirmed",
            "body": (
                f"Hi {context.get('name', '')},\n\n"
                f"Your order #{order_id} has been placed.\n\n"
                + "\n".join(line_rows)
                + "\n\n"
                + "\n".join(summary)
                + f"\n\nDelivering to: {context.get('address', '')}\n\n"
                "Thank you for shopping with us!"
            ),
        }
