"""
Machine à états d'un paiement.

    idle -> creating_order -> awaiting_gateway_result -> {succeeded | cancelled | failed}

- sans utilisateur authentifié, creating_order revient à idle (auth requise)
- un échec de création d'ordre mène à failed
- resolve() est l'unique point de résolution du widget; une seconde résolution lève InvalidTransition
"""
from typing import Any, Dict, List, Optional

from .models import FlowState, GatewayOutcome, GatewayResult, Order, OrderStatus

TRANSITIONS = {
    FlowState.IDLE: {FlowState.CREATING_ORDER},
    FlowState.CREATING_ORDER: {FlowState.IDLE, FlowState.AWAITING_GATEWAY_RESULT, FlowState.FAILED},
    FlowState.AWAITING_GATEWAY_RESULT: {FlowState.SUCCEEDED, FlowState.CANCELLED, FlowState.FAILED},
    FlowState.SUCCEEDED: set(),
    FlowState.CANCELLED: set(),
    FlowState.FAILED: set(),
}

TERMINAL = {FlowState.SUCCEEDED, FlowState.CANCELLED, FlowState.FAILED}

_OUTCOMES = {
    GatewayOutcome.SUCCESS: FlowState.SUCCEEDED,
    GatewayOutcome.DISMISSED: FlowState.CANCELLED,
    GatewayOutcome.ERROR: FlowState.FAILED,
}

class InvalidTransition(Exception):
    def __init__(self, current: FlowState, target: FlowState):
        super().__init__(f"Transition interdite: {current.value} -> {target.value}")
        self.current = current
        self.target = target

class PaymentFlow:
    def __init__(self, state: FlowState = FlowState.IDLE):
        self.state = state
        self.history: List[FlowState] = [state]
        self.gateway_order_id: Optional[str] = None
        self.error: Optional[str] = None

    @classmethod
    def for_order(cls, order: Order) -> "PaymentFlow":
        """Reprend le flux d'un ordre déjà créé (requêtes HTTP sans état)."""
        state = FlowState.SUCCEEDED if order.status == OrderStatus.PAID.value else FlowState.AWAITING_GATEWAY_RESULT
        flow = cls(state)
        flow.gateway_order_id = order.razorpay_order_id
        return flow

    @property
    def done(self) -> bool:
        return self.state in TERMINAL

    def _move(self, target: FlowState) -> None:
        if target not in TRANSITIONS[self.state]:
            raise InvalidTransition(self.state, target)
        self.state = target
        self.history.append(target)

    def start(self, user: Optional[Dict[str, Any]]) -> bool:
        self._move(FlowState.CREATING_ORDER)
        if not user or not user.get("id"):
            self.error = "auth_required"
            self._move(FlowState.IDLE)
            return False
        return True

    def order_created(self, gateway_order_id: str) -> None:
        self._move(FlowState.AWAITING_GATEWAY_RESULT)
        self.gateway_order_id = gateway_order_id

    def order_failed(self, error: str) -> None:
        self._move(FlowState.FAILED)
        self.error = error

    def resolve(self, result: GatewayResult) -> FlowState:
        if self.state != FlowState.AWAITING_GATEWAY_RESULT:
            raise InvalidTransition(self.state, _OUTCOMES[result.outcome])
        self._move(_OUTCOMES[result.outcome])
        if result.outcome != GatewayOutcome.SUCCESS:
            self.error = result.error or result.outcome.value
        return self.state
