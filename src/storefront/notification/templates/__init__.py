"""Maps each NotificationKind to the template that renders it."""

from storefront.notification.notification import NotificationKind
from storefront.notification.templates.operations_alert import OperationsAlertTemplate
from storefront.notification.templates.order_confirmation import OrderConfirmationTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationKind.ORDER_CONFIRMATION.value: OrderConfirmationTemplate,
    NotificationKind.OPERATIONS_ALERT.value: OperationsAlertTemplate,
}


def get_template(kind: str) -> type:
    """Return the template class for a notification kind."""
    template = TEMPLATE_REGISTRY.get(kind)
    if template is None:
        raise ValueError(f"No template registered for notification kind: {kind}")
    return template
