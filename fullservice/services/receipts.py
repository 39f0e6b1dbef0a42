from html import escape

from fullservice.schemas.order import Receipt


def render_text(receipt: Receipt) -> str:
    lines = [
        "ORDER RECEIPT",
        f"Order #{receipt.order_number}",
        "",
        f"Product: {receipt.product_name}",
        f"Target #: {receipt.target_number or '-'}",
        f"Price: ${receipt.total_amount:.2f}",
        "",
        f"Buyer: {receipt.buyer_name} (@{receipt.buyer_username})",
        f"Seller: {receipt.seller_name} (@{receipt.seller_username})",
        "",
        f"Order Date: {receipt.order_date:%Y-%m-%d}",
        f"Status: {receipt.status.upper()}",
    ]
    return "\n".join(lines) + "\n"


def render_html(receipt: Receipt) -> str:
    """Printable card; every value is escaped."""
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>Receipt {escape(receipt.order_number)}</title></head>
<body>
<div style="max-width: 400px; margin: 0 auto; padding: 20px; font-family: Arial, sans-serif; border: 2px solid #333;">
  <div style="text-align: center; margin-bottom: 20px;">
    <h2 style="margin: 0;">ORDER RECEIPT</h2>
    <p style="margin: 5px 0; color: #666;">Order #{escape(receipt.order_number)}</p>
  </div>
  <div style="border-bottom: 1px solid #ddd; padding-bottom: 15px; margin-bottom: 15px;">
    <h3>Product Details</h3>
    <p><strong>Product:</strong> {escape(receipt.product_name)}</p>
    <p><strong>Target #:</strong> {escape(receipt.target_number or "-")}</p>
    <p><strong>Price:</strong> ${receipt.total_amount:.2f}</p>
  </div>
  <div style="border-bottom: 1px solid #ddd; padding-bottom: 15px; margin-bottom: 15px;">
    <h3>Buyer Information</h3>
    <p><strong>Name:</strong> {escape(receipt.buyer_name)}</p>
    <p><strong>Username:</strong> @{escape(receipt.buyer_username)}</p>
  </div>
  <div style="border-bottom: 1px solid #ddd; padding-bottom: 15px; margin-bottom: 15px;">
    <h3>Seller Information</h3>
    <p><strong>Name:</strong> {escape(receipt.seller_name)}</p>
    <p><strong>Username:</strong> @{escape(receipt.seller_username)}</p>
  </div>
  <div style="text-align: center; margin-top: 20px; color: #666; font-size: 12px;">
    <p style="margin: 0;">Order Date: {receipt.order_date:%Y-%m-%d}</p>
    <p style="margin: 0;">Status: {escape(receipt.status.upper())}</p>
  </div>
</div>
</body>
</html>
"""
