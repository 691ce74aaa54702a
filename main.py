import argparse
import logging
import sys

from database.config import get_db_context, init_db
from database.bootstrap import render_schema_sql, seed_admin, seed_card_designs

# Configure Logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stderr)]
)


def print_schema():
    sys.stdout.write(render_schema_sql())


def create_tables():
    logging.info("Creating database tables...")
    init_db()


def seed():
    logging.info("Seeding admin user and card designs...")
    with get_db_context() as db:
        admin_email = seed_admin(db).email
        added = seed_card_designs(db)
    logging.info(f"Seed complete. Admin: {admin_email}, new designs: {added}")


COMMANDS = {
    "schema": print_schema,
    "init-db": create_tables,
    "seed": seed,
}


def main(argv=None):
    parser = argparse.ArgumentParser(description="TapOnce database tools")
    parser.add_argument("command", choices=list(COMMANDS), help="schema: print SQL, init-db: create tables, seed: insert seed data")
    args = parser.parse_args(argv)

    COMMANDS[args.command]()


if __name__ == "__main__":
    main()
