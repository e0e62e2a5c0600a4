#!/usr/bin/env python3
"""
Command-line tools for Captain's Lounge: chat with the Captain's assistant,
prepare the database, and list bookings.
"""
import argparse
import sys

from lounge.chatbot import QUICK_QUESTIONS, WELCOME_MESSAGE, Answered, CaptainAssistant


class CaptainChat:
    def __init__(self, assistant=None, show_scores=False):
        self.assistant = assistant or CaptainAssistant()
        self.show_scores = show_scores
        self.running = True

    def start(self):
        print(f"\n⚓ {WELCOME_MESSAGE}")
        print("Popular questions:")
        for q in QUICK_QUESTIONS:
            print(f"   • {q}")
        print("Type 'exit' to quit at any time.\n")

        while self.running:
            try:
                user_input = input("\nYou: ").strip()
            except (KeyboardInterrupt, EOFError):
                print("\n👋 Goodbye!")
                self.running = False
                continue

            if user_input.lower() in ['exit', 'quit', 'bye']:
                print("\n👋 Thank you for visiting Captain's Lounge! Have a great day!")
                self.running = False
                continue
            if not user_input:
                continue

            reply = self.assistant.reply(user_input)
            print(f"\n🧭 {reply.text}")
            if self.show_scores and isinstance(reply, Answered):
                print(f"   [{reply.entry.id} score={reply.match.score} type={reply.match.match_type.value}]")


def view_bookings():
    """Print all bookings and a status summary"""
    from lounge.database import SessionLocal, init_db
    from lounge.storage import DatabaseStorage

    init_db()
    db = SessionLocal()
    try:
        bookings = DatabaseStorage(db).list_bookings()
        print("⚓ Captain's Lounge - Bookings")
        print("=" * 60)
        if not bookings:
            print("No bookings found.")
            return
        print(f"{'Date':<12} {'Slot':<10} {'Guest':<20} {'Total':>8} {'Payment':<10} {'Status':<10}")
        print("-" * 75)
        for b in bookings:
            guest = b.user.name if b.user else "?"
            print(f"{b.booking_date:<12} {b.time_slot:<10} {guest:<20} {float(b.total_price):>8.2f} "
                  f"{b.payment_status or '':<10} {b.status or '':<10}")

        print("\n📊 SUMMARY:")
        print("-" * 30)
        print(f"Total Bookings: {len(bookings)}")
        print(f"Paid: {sum(1 for b in bookings if b.payment_status == 'completed')}")
        print(f"Pending payment: {sum(1 for b in bookings if b.payment_status == 'pending')}")
        print(f"Cancelled: {sum(1 for b in bookings if b.status == 'cancelled')}")
    finally:
        db.close()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Captain's Lounge tools")
    sub = parser.add_subparsers(dest="command")
    chat = sub.add_parser("chat", help="talk to the Captain's assistant")
    chat.add_argument("--scores", action="store_true", help="show matched FAQ id and score")
    init = sub.add_parser("init-db", help="create tables and open upcoming time slots")
    init.add_argument("--days", type=int, default=14)
    sub.add_parser("bookings", help="list bookings")
    args = parser.parse_args(argv)

    if args.command == "init-db":
        from lounge.init_db import init_database
        init_database(days=args.days)
    elif args.command == "bookings":
        view_bookings()
    else:
        CaptainChat(show_scores=getattr(args, "scores", False)).start()
    return 0


if __name__ == "__main__":
    sys.exit(main())
