import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy import func, select

from library_api.extensions import db
from library_api.models.book import Book

SAMPLE_BOOKS = [
    ("The Go Programming Language", "Alan Donovan, Brian Kernighan", 2015, True),
    ("Clean Code", "Robert C. Martin", 2008, True),
    ("Design Patterns", "Gang of Four", 1994, True),
    ("The Pragmatic Programmer", "Andy Hunt, Dave Thomas", 1999, False),
    ("Effective Go", "The Go Team", 2020, True),
    ("Database Design for Mere Mortals", "Michael J. Hernandez", 2013, True),
    ("RESTful Web APIs", "Leonard Richardson, Mike Amundsen", 2013, True),
    ("Docker Deep Dive", "Nigel Poulton", 2020, False),
    ("Microservices Patterns", "Chris Richardson", 2018, True),
    ("Building Microservices", "Sam Newman", 2015, True),
]


def ensure_schema(app):
    """Create the books table and its indexes when they are missing."""
    with app.app_context():
        db.create_all()
        app.logger.info("[schema] books table ready")


def seed_sample_books(session) -> int:
    """Insert the sample catalogue into an empty table; returns rows added."""
    if session.scalar(select(func.count()).select_from(Book)):
        return 0
    session.add_all([
        Book(title=title, author=author, published_year=year, available=available)
        for title, author, year, available in SAMPLE_BOOKS
    ])
    session.commit()
    return len(SAMPLE_BOOKS)


@click.command("init-db")
@click.option("--seed", is_flag=True, help="Insert sample books into an empty table.")
@with_appcontext
def init_db_command(seed):
    """Create the books table (and optionally sample data)."""
    db.create_all()
    click.echo("Initialized the database.")
    if seed:
        added = seed_sample_books(db.session)
        current_app.logger.info(f"[schema] seeded {added} sample books")
        click.echo(f"Added {added} sample books.")
