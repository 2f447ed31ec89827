# tests/test_dashboard.py
from bs4 import BeautifulSoup

from core.admin import BOOK_CATEGORY_TAXONOMY, DASHBOARD_WIDGET_ID, NO_CATEGORIES_FOUND


def widget(host):
    return host.setup_dashboard().widgets[DASHBOARD_WIDGET_ID]


def add_books_in_category(books, name, count):
    for number in range(count):
        record = books.create_book(f"{name} {number}")
        books.set_terms(record.id, BOOK_CATEGORY_TAXONOMY, [name])


def test_widget_is_registered(plugin, host):
    registered = widget(host)
    assert registered.title == "Top 5 Book Categories"


def test_no_categories(plugin, host):
    assert widget(host).render() == "No categories found."
    assert NO_CATEGORIES_FOUND == "No categories found."


def test_empty_categories_are_hidden(plugin, host, books):
    books.get_or_create_term(BOOK_CATEGORY_TAXONOMY, "Unused")
    assert widget(host).render() == NO_CATEGORIES_FOUND


def test_lists_five_categories_ascending_by_count(plugin, host, books):
    add_books_in_category(books, "Poetry", 3)
    add_books_in_category(books, "Drama", 1)
    add_books_in_category(books, "History", 2)
    add_books_in_category(books, "Horror", 4)
    add_books_in_category(books, "Fantasy", 6)
    add_books_in_category(books, "Travel", 5)
    books.get_or_create_term(BOOK_CATEGORY_TAXONOMY, "Unused")

    soup = BeautifulSoup(widget(host).render(), "html.parser")

    assert [li.get_text() for li in soup.find_all("li")] == [
        "Drama (1 posts)",
        "History (2 posts)",
        "Poetry (3 posts)",
        "Horror (4 posts)",
        "Travel (5 posts)",
    ]


def test_other_taxonomies_are_not_counted(plugin, host, books):
    record = books.create_book("Dune")
    books.set_terms(record.id, "book_tag", ["Desert"])
    books.set_terms(record.id, "category", ["Science Fiction"])
    assert widget(host).render() == NO_CATEGORIES_FOUND
