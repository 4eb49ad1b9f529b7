"""
Per-user cart aggregator.

``CartStore`` owns the line set for one user. It loads the stored lines once
when built and writes the whole set back after every mutation. Persistence is
best effort: a failed write is logged and the in-memory cart stays usable.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

from apps.common import get_logger
from apps.common.state import StateStore
from .dtos import CartLine, CartTotals
from .errors import InvalidQuantityError, OptionConflictError
from .pricing import compute_totals

logger = get_logger(__name__).bind(component="carts", layer="store")

CART_KEY = "apm_cart"

REPLACE_OPTIONS = "replace"
REJECT_CONFLICTING_OPTIONS = "reject"
MERGE_POLICIES = (REPLACE_OPTIONS, REJECT_CONFLICTING_OPTIONS)


def _require_positive_int(quantity: Any) -> int:
    # bool is an int subclass; True must not count as one item.
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidQuantityError(details={"quantity": str(quantity)})
    return quantity


class CartStore:
    def __init__(
        self,
        store: StateStore,
        *,
        threshold: Decimal = Decimal("100000"),
        flat_fee: Decimal = Decimal("2500"),
        merge_policy: str = REPLACE_OPTIONS,
    ):
        if merge_policy not in MERGE_POLICIES:
            raise ValueError(f"Unknown option merge policy: {merge_policy}")
        self.store = store
        self.threshold = threshold
        self.flat_fee = flat_fee
        self.merge_policy = merge_policy
        self.logger = logger.bind(owner=store.owner)
        self._lines: Dict[str, CartLine] = self._load()

    def _load(self) -> Dict[str, CartLine]:
        raw = self.store.load_best_effort(CART_KEY, [])
        if not isinstance(raw, list):
            self.logger.warning("Discarding unreadable cart", kind=type(raw).__name__)
            return {}
        lines: Dict[str, CartLine] = {}
        for entry in raw:
            line = CartLine.from_payload(entry)
            if line is None:
                self.logger.warning("Skipping malformed cart line")
                continue
            lines[line.product_id] = line
        return lines

    def _persist(self) -> None:
        self.store.save_best_effort(
            CART_KEY, [line.to_payload() for line in self._lines.values()]
        )

    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    def contains(self, product_id: Any) -> bool:
        return str(product_id) in self._lines

    def is_empty(self) -> bool:
        return not self._lines

    def totals(self) -> CartTotals:
        return compute_totals(self._lines.values(), self.threshold, self.flat_fee)

    def add_item(
        self,
        product: Any,
        quantity: int = 1,
        options: Optional[Mapping[str, Any]] = None,
    ) -> CartLine:
        """
        Add ``quantity`` of ``product`` or merge it into the existing line.

        ``product`` is anything exposing ``id``, ``name``, ``price`` and
        optionally ``image``. On a re-add, supplied options are handled by the
        merge policy; omitting them keeps the ones already chosen.
        """
        quantity = _require_positive_int(quantity)
        chosen = {str(k): str(v) for k, v in (options or {}).items()}
        pid = str(product.id)
        line = self._lines.get(pid)
        if line is None:
            line = CartLine(
                product_id=pid,
                name=str(product.name),
                unit_price=Decimal(str(product.price)),
                quantity=quantity,
                image=str(getattr(product, "image", "") or ""),
                options=chosen,
            )
            self._lines[pid] = line
        else:
            line.options = self._merge_options(pid, line.options, chosen)
            line.quantity += quantity
        self._persist()
        self.logger.info(
            "Cart item added", product_id=pid, quantity=quantity, line_quantity=line.quantity
        )
        return line

    def _merge_options(
        self, product_id: str, current: Dict[str, str], incoming: Dict[str, str]
    ) -> Dict[str, str]:
        if not incoming:
            return current
        if self.merge_policy == REPLACE_OPTIONS:
            return incoming
        conflicts = {
            group: {"chosen": current[group], "requested": value}
            for group, value in incoming.items()
            if group in current and current[group] != value
        }
        if conflicts:
            self.logger.warning(
                "Rejected conflicting options", product_id=product_id, groups=sorted(conflicts)
            )
            raise OptionConflictError(
                details={"productId": product_id, "options": conflicts}
            )
        merged = dict(current)
        merged.update(incoming)
        return merged

    def remove_item(self, product_id: Any) -> None:
        pid = str(product_id)
        if self._lines.pop(pid, None) is None:
            return
        self._persist()
        self.logger.info("Cart item removed", product_id=pid)

    def set_quantity(self, product_id: Any, quantity: int) -> Optional[CartLine]:
        """Replace the quantity; zero or less removes the line. Unknown ids are ignored."""
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidQuantityError(details={"quantity": str(quantity)})
        pid = str(product_id)
        if quantity <= 0:
            self.remove_item(pid)
            return None
        line = self._lines.get(pid)
        if line is None:
            return None
        line.quantity = quantity
        self._persist()
        self.logger.info("Cart quantity set", product_id=pid, quantity=quantity)
        return line

    def deduct(self, paid: Iterable[CartLine]) -> None:
        """Take the paid quantities out of the cart; lines added since stay."""
        changed = False
        for paid_line in paid:
            line = self._lines.get(paid_line.product_id)
            if line is None:
                continue
            line.quantity -= paid_line.quantity
            if line.quantity <= 0:
                del self._lines[paid_line.product_id]
            changed = True
        if not changed:
            return
        self._persist()
        self.logger.info("Paid items removed from cart", remaining=len(self._lines))

    def clear(self) -> None:
        self._lines.clear()
        self._persist()
        self.logger.info("Cart cleared")
