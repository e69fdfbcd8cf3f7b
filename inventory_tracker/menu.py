"""Interactive text menu on top of :class:`InventoryManager`."""
from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from .errors import InsufficientStockError, InventoryError, RecordNotFoundError
from .inventory import InventoryManager
from .records import InventoryRecord, ItemKind, is_valid_date

MENU_OPTIONS = (
    "Add New Item",
    "Update Stock",
    "Remove Item",
    "View All Items",
    "Search Items",
    "Generate Low Stock Report",
    "Exit",
)
KIND_OPTIONS = (ItemKind.ELECTRONICS, ItemKind.GROCERY, ItemKind.GENERIC)

_WIDE_RULE = "=" * 90
_NARROW_RULE = "=" * 50


def _price_label(price: float) -> str:
    return f"${price:.2f}"


def _detail_label(record: InventoryRecord) -> str:
    values = record.detail_values()
    return str(values[0]) if values else ""


def format_table(records: Sequence[InventoryRecord], title: str = "INVENTORY") -> List[str]:
    lines = [_WIDE_RULE, title.center(90).rstrip(), _WIDE_RULE]
    lines.append(
        f"{'ID':<5}{'Name':<20}{'Price':<10}{'Qty':<10}{'Type':<15}{'Details':<15}Additional Info"
    )
    lines.append("-" * 90)
    for record in records:
        lines.append(
            f"{record.id:<5}{record.name[:19]:<20}{_price_label(record.price):<10}"
            f"{record.quantity:<10}{record.kind.value:<15}{_detail_label(record)[:14]:<15}"
            f"{record.additional_info()}"
        )
    lines.append(_WIDE_RULE)
    return lines


def format_low_stock_report(records: Sequence[InventoryRecord], threshold: int) -> List[str]:
    lines = [
        _NARROW_RULE,
        f"LOW STOCK REPORT (Below {threshold} items)".center(50).rstrip(),
        _NARROW_RULE,
        f"{'ID':<5}{'Name':<20}{'Qty':<10}{'Type':<15}",
        "-" * 50,
    ]
    if not records:
        lines.append(f"No items below threshold of {threshold} units.")
    for record in records:
        lines.append(
            f"{record.id:<5}{record.name[:19]:<20}{record.quantity:<10}{record.kind.value:<15}"
        )
    lines.append(_NARROW_RULE)
    return lines


class InventoryMenu:
    """Prompt-driven shell for managing the inventory.

    ``input_func`` and ``output`` default to :func:`input` and :func:`print`
    and can be swapped for scripted I/O.
    """

    def __init__(
        self,
        manager: InventoryManager,
        *,
        input_func: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
        low_stock_threshold: Optional[int] = None,
    ) -> None:
        self.manager = manager
        self._input = input_func
        self._output = output
        self.low_stock_threshold = (
            manager.low_stock_threshold if low_stock_threshold is None else low_stock_threshold
        )

    def run(self) -> None:
        self._say("=" * 40)
        self._say("   INVENTORY MANAGEMENT SYSTEM")
        self._say("=" * 40)
        actions = (
            self.add_item,
            self.update_stock,
            self.remove_item,
            self.view_items,
            self.search_items,
            self.low_stock_report,
        )
        last = len(MENU_OPTIONS)
        try:
            while True:
                self._show_menu()
                choice = self._prompt_int(
                    f"\nEnter your choice (1-{last}): ",
                    minimum=1,
                    maximum=last,
                    error=f"Invalid choice. Please enter a number between 1 and {last}: ",
                )
                if choice == last:
                    break
                actions[choice - 1]()
        except EOFError:
            pass
        self._say("\nThank you for using the Inventory Management System. Goodbye!")

    # ------------------------------------------------------------------
    # Menu actions
    # ------------------------------------------------------------------
    def add_item(self) -> Optional[InventoryRecord]:
        self._say("\n=== ADD NEW ITEM ===")
        for index, kind in enumerate(KIND_OPTIONS, start=1):
            self._say(f"{index}. {kind.value}")
        back = len(KIND_OPTIONS) + 1
        self._say(f"{back}. Back to Main Menu")
        choice = self._prompt_int(
            f"\nSelect item type (1-{back}): ",
            minimum=1,
            maximum=back,
            error=f"Invalid choice. Please enter a number between 1 and {back}: ",
        )
        if choice == back:
            return None
        kind = KIND_OPTIONS[choice - 1]

        name = self._prompt_text("\nEnter item name: ", required=True)
        price = self._prompt_float(
            "Enter price: $", error="Invalid price. Please enter a non-negative number: $"
        )
        quantity = self._prompt_int(
            "Enter quantity: ",
            minimum=0,
            error="Invalid quantity. Please enter a non-negative integer: ",
        )
        details = {}
        if kind is ItemKind.ELECTRONICS:
            details["brand"] = self._prompt_text("Enter brand: ")
            details["warranty_months"] = self._prompt_int(
                "Enter warranty period (months): ",
                minimum=0,
                error="Invalid warranty period. Please enter a non-negative integer: ",
            )
        elif kind is ItemKind.GROCERY:
            details["category"] = self._prompt_text("Enter category (e.g., Dairy, Snacks): ")
            details["expiry_date"] = self._prompt_date("Enter expiry date (YYYY-MM-DD): ")
        else:
            category = self._prompt_text("Enter category (blank for General): ")
            if category:
                details["category"] = category

        try:
            record = self.manager.create(kind, name, price, quantity, **details)
        except InventoryError as exc:
            self._say(f"\nError: {exc}")
            return None
        self._say(f"\nItem added successfully! ID: {record.id}")
        self._report_save_failure()
        return record

    def update_stock(self) -> None:
        self._say("\n=== UPDATE STOCK ===")
        record_id = self._prompt_id("Enter item ID: ")
        action = self._prompt_choice(
            "Add (A) or remove (R) stock? (A/R): ",
            choices=("A", "R"),
            error="Invalid choice. Please enter 'A' to add or 'R' to remove: ",
        )
        verb = "add" if action == "A" else "remove"
        amount = self._prompt_int(
            f"Enter quantity to {verb}: ",
            minimum=1,
            error="Invalid amount. Please enter a positive number: ",
        )
        delta = amount if action == "A" else -amount
        try:
            new_quantity = self.manager.update_stock(record_id, delta)
        except (RecordNotFoundError, InsufficientStockError) as exc:
            self._say(f"\nError: {exc}")
            return
        self._say(f"\nStock updated successfully! New quantity: {new_quantity}")
        self._report_save_failure()

    def remove_item(self) -> None:
        self._say("\n=== REMOVE ITEM ===")
        record_id = self._prompt_id("Enter item ID to remove: ")
        try:
            name = self.manager.remove(record_id)
        except RecordNotFoundError as exc:
            self._say(f"\nError: {exc}")
            return
        self._say(f"\nItem with ID {record_id} ({name}) has been removed.")
        self._report_save_failure()

    def view_items(self) -> None:
        records = self.manager.list_items()
        if not records:
            self._say("\nNo items in inventory.")
            return
        self._say("")
        for line in format_table(records):
            self._say(line)

    def search_items(self) -> None:
        self._say("\n=== SEARCH ITEMS ===")
        query = self._input("Enter name, category or ID: ").strip()
        records = self.manager.search(query)
        if not records:
            self._say(f"\nNo items match '{query}'.")
            return
        self._say("")
        for line in format_table(records, title="SEARCH RESULTS"):
            self._say(line)

    def low_stock_report(self) -> None:
        threshold = self.low_stock_threshold
        self._say("\n")
        for line in format_low_stock_report(self.manager.low_stock(threshold), threshold):
            self._say(line)

    # ------------------------------------------------------------------
    # Prompt helpers
    # ------------------------------------------------------------------
    def _say(self, message: str) -> None:
        self._output(message)

    def _show_menu(self) -> None:
        self._say("\n\n=== INVENTORY MANAGEMENT SYSTEM ===")
        for index, label in enumerate(MENU_OPTIONS, start=1):
            self._say(f"{index}. {label}")

    def _report_save_failure(self) -> None:
        if self.manager.last_save_error is not None:
            self._say(f"Warning: changes were not saved ({self.manager.last_save_error}).")

    def _prompt_int(
        self,
        prompt: str,
        *,
        minimum: Optional[int] = None,
        maximum: Optional[int] = None,
        error: str,
    ) -> int:
        raw = self._input(prompt)
        while True:
            try:
                value = int(raw.strip())
            except ValueError:
                value = None
            if value is not None and (minimum is None or value >= minimum) and (
                maximum is None or value <= maximum
            ):
                return value
            raw = self._input(error)

    def _prompt_id(self, prompt: str) -> int:
        return self._prompt_int(
            prompt, minimum=1, error="Invalid ID. Please enter a positive number: "
        )

    def _prompt_float(self, prompt: str, *, error: str) -> float:
        raw = self._input(prompt)
        while True:
            try:
                value = float(raw.strip())
            except ValueError:
                value = -1.0
            if value >= 0 and value != float("inf"):
                return value
            raw = self._input(error)

    def _prompt_text(self, prompt: str, *, required: bool = False) -> str:
        raw = self._input(prompt).strip()
        while True:
            if "," in raw:
                raw = self._input("Commas are not allowed. Please try again: ").strip()
            elif required and not raw:
                raw = self._input("This field cannot be empty. Please try again: ").strip()
            else:
                return raw

    def _prompt_date(self, prompt: str) -> str:
        raw = self._input(prompt).strip()
        while not is_valid_date(raw):
            raw = self._input("Invalid date. Please use the YYYY-MM-DD format: ").strip()
        return raw

    def _prompt_choice(self, prompt: str, *, choices: Sequence[str], error: str) -> str:
        raw = self._input(prompt).strip().upper()
        while raw not in choices:
            raw = self._input(error).strip().upper()
        return raw


__all__ = ["InventoryMenu", "format_low_stock_report", "format_table"]
