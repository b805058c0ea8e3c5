from unittest.mock import MagicMock

from pageimages.services.page_props import PagePropsRepository

PROP_NAMES = ("page_image_free", "page_image")


def _mock_transaction(cursor):
    conn = MagicMock()
    conn.cursor.return_value.__enter__.return_value = cursor
    transaction = MagicMock()
    transaction.return_value.__enter__.return_value = conn
    return transaction


def test_replace_deletes_both_names_then_inserts_present_ones():
    cursor = MagicMock()
    transaction = _mock_transaction(cursor)
    repository = PagePropsRepository(PROP_NAMES, transaction=transaction)

    repository.replace_page_images(17, {"page_image_free": "A.jpg"})

    # One transaction for the whole replacement
    transaction.assert_called_once_with()
    delete_call, insert_call = cursor.execute.call_args_list
    assert "DELETE FROM page_props" in delete_call.args[0]
    assert "ANY(%s)" in delete_call.args[0]
    assert delete_call.args[1] == (17, ["page_image_free", "page_image"])
    assert "INSERT INTO page_props" in insert_call.args[0]
    assert insert_call.args[1] == (17, "page_image_free", "A.jpg")


def test_replace_with_both_properties():
    cursor = MagicMock()
    repository = PagePropsRepository(PROP_NAMES, transaction=_mock_transaction(cursor))

    repository.replace_page_images(3, {"page_image_free": "B.jpg", "page_image": "A.jpg"})

    inserted = [c.args[1] for c in cursor.execute.call_args_list[1:]]
    assert inserted == [(3, "page_image_free", "B.jpg"), (3, "page_image", "A.jpg")]


def test_replace_with_nothing_only_clears():
    cursor = MagicMock()
    repository = PagePropsRepository(PROP_NAMES, transaction=_mock_transaction(cursor))

    repository.replace_page_images(3, {})

    assert cursor.execute.call_count == 1
    assert "DELETE FROM page_props" in cursor.execute.call_args.args[0]


def test_get_page_images():
    cursor = MagicMock()
    cursor.fetchall.return_value = [("page_image_free", "B.jpg"), ("page_image", "A.jpg")]
    repository = PagePropsRepository(PROP_NAMES, transaction=_mock_transaction(cursor))

    assert repository.get_page_images(3) == {"page_image_free": "B.jpg", "page_image": "A.jpg"}
    assert cursor.execute.call_args.args[1] == (3, ["page_image_free", "page_image"])
