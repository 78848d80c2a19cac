"""
Offline console demo: drives the customer count screen without a server.

Runs the real gateway, enricher, scratch store and save reconciler against
the in-memory mock backend (served through httpx.MockTransport). No network
calls, no credentials. Designed for walkthroughs of the reconciliation flow.

Usage:
    python console_demo.py
    python console_demo.py --scenario partial
    python console_demo.py --scenario counts-failure
"""

import argparse
import asyncio
from datetime import datetime, timedelta

from customer_counts.core.screen import CustomerCountScreen
from customer_counts.remote.gateway import RemoteGateway
from customer_counts.remote.mock_backend import MOCK_TOKEN, MockCustomerBackend
from customer_counts.schemas.save_schema import SaveResult

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"


class ConsoleScreenDemo:
    """Plays one scripted session against the mock backend."""

    def __init__(self) -> None:
        self.backend = MockCustomerBackend()
        self.gateway = RemoteGateway(
            credential_provider=lambda: MOCK_TOKEN,
            client=self.backend.client(),
        )
        self.screen = CustomerCountScreen(self.gateway)

    def say(self, text: str) -> None:
        print(f"{GREEN}{BOLD}[screen]{RESET} {GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def show_cards(self) -> None:
        counts = self.screen.state.counts
        print(
            f"{BLUE}{BOLD}Visitors: {counts.visitor_count}{RESET}   "
            f"{BLUE}{BOLD}Shoppers: {counts.shopper_count}{RESET}"
        )

    def show_list(self) -> None:
        print(f"{BOLD}{self.screen.category_title()}{RESET}")
        for record in self.screen.display_records():
            print(f"  ID: {record.id}  {record.name} <{record.email}>  {record.phone_number}")
            print(f"    Sales Person: {record.salesperson_name}")
            print(f"    Feedback: {self.screen.feedback_display_value(record)}")
            if record.is_editable:
                print(f"    Reminder: {self.screen.reminder_display_value(record)}")

    def show_result(self, result: SaveResult) -> None:
        colour = GREEN if result.ok else (YELLOW if result.saved_fields else RED)
        self.say(f"{colour}Save {result.record_id}: {result.status.value}{RESET}")
        for failure in result.failures:
            self.system_log(f"{failure.field_name} failed: {failure.message}")

    async def run(self, scenario: str) -> None:
        try:
            await self._run(scenario)
        finally:
            await self.gateway.aclose()

    async def _run(self, scenario: str) -> None:
        if scenario == "counts-failure":
            self.backend.fail_category("shoppers")
            self.system_log("Injected failure on GET /customers/shoppers/")

        await self.screen.activate()
        self.show_cards()
        if scenario == "counts-failure":
            self.say("Counts reset together because one list could not be fetched.")
            return

        self.backend.fail_reminder_lookup(2)
        self.system_log("Injected failure on GET /reminders/2/")
        await self.screen.open_category("visitors")
        self.show_list()

        tomorrow = (datetime.now() + timedelta(days=1)).replace(
            hour=10, minute=30, second=0, microsecond=0
        )
        self.screen.set_feedback(1, "  Coming back Saturday with a partner.  ")
        self.screen.show_picker(1)
        self.screen.confirm_picker(tomorrow)
        self.screen.set_feedback(2, "Wants the delivery quote by email.")
        self.system_log(f"Pending edits for {self.screen.state.scratch.pending_ids()}")

        if scenario == "partial":
            self.backend.fail_reminder_upsert(1)
            self.system_log("Injected failure on POST /reminders/1/")

        results = await asyncio.gather(self.screen.save(1), self.screen.save(2))
        for result in results:
            self.show_result(result)
        self.show_list()

        if self.screen.has_unsaved_edits():
            self.system_log(f"Still pending: {self.screen.state.scratch.pending_ids()}")
        self.screen.close_detail()
        self.say("Detail view closed; unsaved edits discarded.")

        await self.screen.refresh_counts()
        self.show_cards()


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline console demo")
    parser.add_argument(
        "--scenario",
        choices=["happy", "partial", "counts-failure"],
        default="happy",
        help="Scripted session to play",
    )
    args = parser.parse_args()
    asyncio.run(ConsoleScreenDemo().run(args.scenario))


if __name__ == "__main__":
    main()
