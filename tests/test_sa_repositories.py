# tests/test_sa_repositories.py
import pytest

from core.models.book import BookQuery, MetaCompare, MetaFilter, TaxFilter, TermQuery
from core.sa.models import Post, PostMeta, TermRelationship
from core.shortcodes import NO_BOOKS_FOUND, BookShortcode


@pytest.fixture
def dune(sql_books):
    record = sql_books.create_book("Dune", content="Arrakis", author_id=2)
    sql_books.update_meta(record.id, "_book_author_name", "Frank Herbert")
    sql_books.update_meta(record.id, "_book_year", 1965)
    sql_books.set_terms(record.id, "category", ["Science Fiction"])
    sql_books.set_terms(record.id, "book_category", ["Classics"])
    return sql_books.get_book(record.id)


@pytest.fixture
def emma(sql_books):
    record = sql_books.create_book("Emma", author_id=3)
    sql_books.update_meta(record.id, "_book_author_name", "Jane Austen")
    sql_books.update_meta(record.id, "_book_year", 1815)
    sql_books.set_terms(record.id, "post_tag", ["Classic"])
    return sql_books.get_book(record.id)


def test_create_and_get(sql_books, dune):
    assert dune.id > 0
    assert dune.title == "Dune"
    assert dune.content == "Arrakis"
    assert dune.post_type == "book"
    assert dune.status == "publish"
    assert dune.created_at is not None
    assert dune.author_name == "Frank Herbert"
    assert dune.year == "1965"
    assert dune.term_names("category") == ["Science Fiction"]
    assert sql_books.get_book(dune.id + 1000) is None


def test_update_book(sql_books, dune):
    updated = sql_books.update_book(dune.id, title="Dune Messiah", status="draft")
    assert updated.title == "Dune Messiah"
    assert updated.status == "draft"
    assert sql_books.update_book(9999, title="x") is None


def test_meta_values_are_strings(sql_books, dune):
    sql_books.update_meta(dune.id, "_book_price", 12.0)
    assert sql_books.get_meta(dune.id, "_book_price") == "12"
    sql_books.update_meta(dune.id, "_book_price", 12.5)
    assert sql_books.get_meta(dune.id, "_book_price") == "12.5"
    assert sql_books.get_meta(dune.id, "_book_missing") == ""
    assert sql_books.get_meta(dune.id, "_book_missing", "n/a") == "n/a"


def test_update_meta_keeps_one_row(sql_books, db_session, dune):
    sql_books.update_meta(dune.id, "_book_year", 1966)
    rows = db_session.query(PostMeta).filter_by(post_id=dune.id, meta_key="_book_year").all()
    assert [row.meta_value for row in rows] == ["1966"]


def test_delete_meta(sql_books, dune):
    assert sql_books.delete_meta(dune.id, "_book_year")
    assert not sql_books.delete_meta(dune.id, "_book_year")
    assert "_book_year" not in sql_books.get_all_meta(dune.id)


def test_set_terms_replaces_within_taxonomy(sql_books, dune):
    terms = sql_books.set_terms(dune.id, "category", ["Space Opera", "Ecology"])
    assert [term.name for term in terms] == ["Space Opera", "Ecology"]
    assert [term.slug for term in terms] == ["space-opera", "ecology"]
    # Other taxonomies are untouched
    assert [term.name for term in sql_books.get_book_terms(dune.id, "book_category")] == ["Classics"]


def test_get_or_create_term_reuses_slug(sql_books):
    first = sql_books.get_or_create_term("book_category", "Science Fiction")
    second = sql_books.get_or_create_term("book_category", "science fiction")
    other = sql_books.get_or_create_term("category", "Science Fiction")
    assert first.id == second.id
    assert other.id != first.id


def test_delete_book_removes_meta_and_relationships(sql_books, db_session, dune):
    assert sql_books.delete_book(dune.id)
    assert sql_books.get_book(dune.id) is None
    assert db_session.query(PostMeta).filter_by(post_id=dune.id).count() == 0
    assert db_session.query(TermRelationship).filter_by(post_id=dune.id).count() == 0
    assert not sql_books.delete_book(dune.id)


def test_query_filters(sql_books, dune, emma):
    def titles(**criteria):
        return [record.title for record in sql_books.query(BookQuery(**criteria))]

    assert titles() == ["Emma", "Dune"]
    assert titles(post_id=dune.id) == ["Dune"]
    assert titles(meta_filters=[MetaFilter(key="_book_author_name", value="AUSTEN", compare=MetaCompare.LIKE)]) == ["Emma"]
    assert titles(meta_filters=[MetaFilter(key="_book_year", value="1965")]) == ["Dune"]
    assert titles(meta_filters=[MetaFilter(key="_book_year", value="196")]) == []
    assert titles(tax_filters=[TaxFilter(taxonomy="category", terms=["science-fiction"])]) == ["Dune"]
    assert titles(tax_filters=[TaxFilter(taxonomy="post_tag", terms=["Classic"], field="name")]) == ["Emma"]
    assert titles(tax_filters=[TaxFilter(taxonomy="book_category", terms=["science-fiction"])]) == []
    assert titles(limit=1) == ["Emma"]


def test_like_filter_escapes_wildcards(sql_books, dune):
    criteria = BookQuery(meta_filters=[MetaFilter(key="_book_author_name", value="%", compare=MetaCompare.LIKE)])
    assert sql_books.query(criteria) == []


def test_query_skips_other_post_types(sql_books, db_session):
    sql_books.create_book("Hello world", post_type="post")
    assert sql_books.query(BookQuery()) == []


def test_get_terms_counts_and_orders(sql_books):
    for name, count in (("Poetry", 3), ("Drama", 1), ("History", 2)):
        for number in range(count):
            record = sql_books.create_book(f"{name} {number}")
            sql_books.set_terms(record.id, "book_category", [name])
    sql_books.get_or_create_term("book_category", "Unused")

    ascending = sql_books.get_terms(TermQuery(taxonomy="book_category", orderby="post_count", number=2))
    assert [(term.name, term.count) for term in ascending] == [("Drama", 1), ("History", 2)]

    descending = sql_books.get_terms(TermQuery(taxonomy="book_category", orderby="count", order="DESC"))
    assert [term.name for term in descending] == ["Poetry", "History", "Drama"]

    everything = sql_books.get_terms(TermQuery(taxonomy="book_category", hide_empty=False))
    assert [(term.name, term.count) for term in everything] == [
        ("Drama", 1), ("History", 2), ("Poetry", 3), ("Unused", 0),
    ]


def test_shortcode_over_sql(sql_books, dune, emma):
    shortcode = BookShortcode(sql_books)
    assert "<h3>Dune</h3>" in shortcode.render({"category": "science-fiction"})
    assert shortcode.render({"category": "classics"}) == NO_BOOKS_FOUND


def test_settings_store(sql_settings):
    assert sql_settings.get_option("wp_book_currency", "USD") == "USD"
    assert not sql_settings.has_option("wp_book_currency")

    sql_settings.update_option("wp_book_currency", "EUR")
    sql_settings.update_option("wp_book_books_per_page", 25)
    sql_settings.update_option("wp_book_currency", "GBP")

    assert sql_settings.get_option("wp_book_currency") == "GBP"
    assert sql_settings.get_option("wp_book_books_per_page") == 25
    assert sql_settings.delete_option("wp_book_currency")
    assert not sql_settings.delete_option("wp_book_currency")
    assert sql_settings.get_option("wp_book_currency") is None


def test_posts_table_holds_books(db_session, dune):
    assert db_session.query(Post).filter_by(post_type="book").count() == 1


def test_query_filters_on_status(sql_books, dune):
    sql_books.create_book("Secret Draft", status="draft")

    assert [record.title for record in sql_books.query(BookQuery())] == ["Dune"]
    assert [record.title for record in sql_books.query(BookQuery(post_status="draft"))] == ["Secret Draft"]
    assert len(sql_books.query(BookQuery(post_status=None))) == 2
    assert BookShortcode(sql_books).render({"author_name": ""}).count("<h3>") == 1
