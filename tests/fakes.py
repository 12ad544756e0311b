from apps.payments.gateway import GatewayPayment, GatewayStatus
from core.exceptions import ExternalGatewayError


class FakeGateway:
    """In-memory stand-in for the UPI gateway; tests flip order states by hand."""

    def __init__(self):
        self.orders = {}
        self.fail_create = False
        self.status_calls = 0

    def create_payment(self, order_id, amount, redirect_url):
        if self.fail_create:
            raise ExternalGatewayError("Payment gateway is unreachable")
        self.orders[order_id] = {'amount': amount, 'state': 'PENDING'}
        return GatewayPayment(f"https://pay.example.test/checkout/{order_id}", f"GW{order_id}", 'PENDING')

    def get_status(self, order_id):
        self.status_calls += 1
        state = self.orders.get(order_id, {}).get('state', 'PENDING')
        return GatewayStatus(state, state == 'COMPLETED', f"TXN{order_id}" if state == 'COMPLETED' else None, {})

    def complete(self, order_id):
        self.orders[order_id]['state'] = 'COMPLETED'

    def fail(self, order_id):
        self.orders[order_id]['state'] = 'FAILED'
