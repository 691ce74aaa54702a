# Order status reference data shared by the admin board, agent portal and tracking page

from database.models import OrderStatus


ORDER_STATUSES = {
    OrderStatus.PENDING_APPROVAL: {
        "label": "Pending Approval",
        "color": "yellow",
        "icon": "⚠️",
        "description": "Order submitted, waiting for admin review",
    },
    OrderStatus.APPROVED: {
        "label": "Approved",
        "color": "green",
        "icon": "✅",
        "description": "Order approved, ready to send for printing",
    },
    OrderStatus.PRINTING: {
        "label": "Printing",
        "color": "blue",
        "icon": "🖨️",
        "description": "Card is being printed",
    },
    OrderStatus.PRINTED: {
        "label": "Printed",
        "color": "purple",
        "icon": "📦",
        "description": "Card printed, received by admin",
    },
    OrderStatus.READY_TO_SHIP: {
        "label": "Ready to Ship",
        "color": "indigo",
        "icon": "📮",
        "description": "NFC written, card packaged",
    },
    OrderStatus.SHIPPED: {
        "label": "Shipped",
        "color": "orange",
        "icon": "🚚",
        "description": "Card shipped to customer",
    },
    OrderStatus.DELIVERED: {
        "label": "Delivered",
        "color": "teal",
        "icon": "🎉",
        "description": "Card delivered to customer",
    },
    OrderStatus.PAID: {
        "label": "Paid",
        "color": "emerald",
        "icon": "💰",
        "description": "Payment received, order complete",
    },
    OrderStatus.REJECTED: {
        "label": "Rejected",
        "color": "red",
        "icon": "❌",
        "description": "Order rejected by admin",
    },
    OrderStatus.CANCELLED: {
        "label": "Cancelled",
        "color": "gray",
        "icon": "🚫",
        "description": "Order cancelled",
    },
}

# Key = current status, value = allowed next statuses
STATUS_TRANSITIONS = {
    OrderStatus.PENDING_APPROVAL: [OrderStatus.APPROVED, OrderStatus.REJECTED, OrderStatus.CANCELLED],
    OrderStatus.APPROVED: [OrderStatus.PRINTING, OrderStatus.REJECTED, OrderStatus.CANCELLED],
    OrderStatus.PRINTING: [OrderStatus.PRINTED],
    OrderStatus.PRINTED: [OrderStatus.READY_TO_SHIP],
    OrderStatus.READY_TO_SHIP: [OrderStatus.SHIPPED],
    OrderStatus.SHIPPED: [OrderStatus.DELIVERED],
    OrderStatus.DELIVERED: [OrderStatus.PAID],
    OrderStatus.PAID: [],
    OrderStatus.REJECTED: [],
    OrderStatus.CANCELLED: [],
}

# Board columns (rejected/cancelled drop off the board)
KANBAN_STATUSES = [
    OrderStatus.PENDING_APPROVAL,
    OrderStatus.APPROVED,
    OrderStatus.PRINTING,
    OrderStatus.PRINTED,
    OrderStatus.READY_TO_SHIP,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
    OrderStatus.PAID,
]

# Customer-facing wording on the tracking page
TRACKING_LABELS = {
    OrderStatus.PENDING_APPROVAL: "Order Received",
    OrderStatus.APPROVED: "Order Confirmed",
    OrderStatus.PRINTING: "Card Being Printed",
    OrderStatus.PRINTED: "Card Ready",
    OrderStatus.READY_TO_SHIP: "Ready for Dispatch",
    OrderStatus.SHIPPED: "Shipped",
    OrderStatus.DELIVERED: "Delivered",
    OrderStatus.PAID: "Completed",
    OrderStatus.REJECTED: "Order Rejected",
    OrderStatus.CANCELLED: "Order Cancelled",
}

TRACKING_TIMELINE = [
    OrderStatus.PENDING_APPROVAL,
    OrderStatus.APPROVED,
    OrderStatus.PRINTING,
    OrderStatus.READY_TO_SHIP,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
]

# No delivery estimate once an order reaches one of these
CLOSED_STATUSES = {
    OrderStatus.DELIVERED,
    OrderStatus.PAID,
    OrderStatus.REJECTED,
    OrderStatus.CANCELLED,
}
