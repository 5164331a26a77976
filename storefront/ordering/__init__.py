"""
Order handoff to the restaurant's messaging app.
"""

from storefront.ordering.handoff import (
    build_whatsapp_url,
    compose_order_message,
    create_order_handoff,
    encode_message,
    resolve_whatsapp_number,
)

__all__ = [
    "build_whatsapp_url",
    "compose_order_message",
    "create_order_handoff",
    "encode_message",
    "resolve_whatsapp_number",
]
