import click
from typing import Optional, Tuple
from bs4 import BeautifulSoup

from core.admin import BOOK_CATEGORY_TAXONOMY, BOOK_TAG_TAXONOMY, META_BOX_NONCE_ACTION, META_BOX_NONCE_NAME
from core.host import SaveRequest
from ..utils import cli_identity, open_plugin, print_table

@click.group()
def book():
    """Book related commands"""
    pass

@book.command()
@click.argument('title')
@click.option('--content', default="", help='Book description')
@click.option('--thumbnail', default=None, help='Cover image URL')
@click.option('--category', 'categories', multiple=True, help='Book category (repeatable)')
@click.option('--tag', 'tags', multiple=True, help='Book tag (repeatable)')
@click.option('--author-name', default="", help='Author name')
@click.option('--price', default="", help='Price')
@click.option('--publisher', default="", help='Publisher')
@click.option('--year', default="", help='Publication year')
@click.option('--edition', default="", help='Edition')
@click.option('--url', default="", help='Book URL')
@click.pass_context
def add(ctx, title: str, content: str, thumbnail: Optional[str], categories: Tuple[str, ...],
        tags: Tuple[str, ...], author_name: str, price: str, publisher: str, year: str,
        edition: str, url: str):
    """Create a book and save its details

    Example:
        cli book add "Dune" --author-name "Frank Herbert" --year 1965 --category "Science Fiction"
    """
    identity = cli_identity()
    with open_plugin(ctx.obj.get('database_url')) as plugin:
        host = plugin.host
        record = host.books.create_book(title=title, content=content, thumbnail=thumbnail,
                                        author_id=identity.user_id)
        host.books.set_terms(record.id, BOOK_CATEGORY_TAXONOMY, list(categories))
        host.books.set_terms(record.id, BOOK_TAG_TAXONOMY, list(tags))

        form = {
            META_BOX_NONCE_NAME: host.nonces.create(META_BOX_NONCE_ACTION, identity),
            'book_author_name': author_name,
            'book_price': price,
            'book_publisher': publisher,
            'book_year': year,
            'book_edition': edition,
            'book_url': url,
        }
        host.save_post(record.id, SaveRequest(form=form, identity=identity))

        click.echo(click.style("Created book ", fg='green') + click.style(f"#{record.id}", fg='cyan') +
                   click.style(f" {title}", fg='green'))

@book.command(name="list")
@click.option('--id', 'book_id', default="", help='Only this book ID')
@click.option('--author-name', default="", help='Author name contains')
@click.option('--year', default="", help='Publication year')
@click.option('--category', default="", help='Category slug')
@click.option('--tag', default="", help='Tag slug')
@click.option('--publisher', default="", help='Publisher contains')
@click.option('--html/--text', default=False, help='Print the raw shortcode HTML')
@click.pass_context
def list_books(ctx, book_id: str, author_name: str, year: str, category: str, tag: str,
               publisher: str, html: bool):
    """List books the way the [book] shortcode does"""
    atts = {'id': book_id, 'author_name': author_name, 'year': year,
            'category': category, 'tag': tag, 'publisher': publisher}
    with open_plugin(ctx.obj.get('database_url'), admin=False) as plugin:
        output = plugin.book_shortcode().render(atts)

    if html:
        click.echo(output)
        return

    soup = BeautifulSoup(output, "html.parser")
    entries = soup.select("div.book")
    if not entries:
        click.echo(soup.get_text(strip=True))
        return
    for entry in entries:
        click.echo(click.style(entry.h3.get_text(strip=True), fg='cyan'))
        for line in entry.find_all("p"):
            click.echo(f"  {line.get_text(' ', strip=True)}")

@book.command()
@click.argument('book_id', type=int)
@click.pass_context
def show(ctx, book_id: int):
    """Show a book's metadata and terms"""
    with open_plugin(ctx.obj.get('database_url'), admin=False) as plugin:
        record = plugin.host.books.get_book(book_id)
        if record is None:
            click.echo(click.style(f"Book {book_id} not found", fg='red'), err=True)
            ctx.exit(1)

        click.echo(click.style(record.title, fg='cyan'))
        rows = [(key, value) for key, value in sorted(record.meta.items())]
        rows.append(('categories', ', '.join(record.term_names(BOOK_CATEGORY_TAXONOMY))))
        rows.append(('tags', ', '.join(record.term_names(BOOK_TAG_TAXONOMY))))
        print_table(('Key', 'Value'), rows)

@book.command()
@click.argument('book_id', type=int)
@click.pass_context
def delete(ctx, book_id: int):
    """Delete a book with its metadata"""
    with open_plugin(ctx.obj.get('database_url'), admin=False) as plugin:
        if plugin.host.books.delete_book(book_id):
            click.echo(click.style(f"Deleted book {book_id}", fg='green'))
        else:
            click.echo(click.style(f"Book {book_id} not found", fg='red'), err=True)
            ctx.exit(1)
