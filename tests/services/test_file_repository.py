from unittest.mock import MagicMock

from pageimages.services.file_repository import DatabaseFileRepository, FileRecord


def _repository(row):
    cursor = MagicMock()
    cursor.fetchone.return_value = row
    conn = MagicMock()
    conn.cursor.return_value.__enter__.return_value = cursor
    transaction = MagicMock()
    transaction.return_value.__enter__.return_value = conn
    return DatabaseFileRepository(dsn="dsn://commons", transaction=transaction), cursor, transaction


def test_find_file_reads_image_row():
    repository, cursor, transaction = _repository(("Foo.jpg", 640, 480, '{"NonFree": {"value": "1"}}'))

    file = repository.find_file("Foo.jpg")

    assert file == FileRecord(name="Foo.jpg", width=640, height=480, raw_metadata='{"NonFree": {"value": "1"}}')
    transaction.assert_called_once_with("dsn://commons")
    assert cursor.execute.call_args.args[1] == ("Foo.jpg",)


def test_find_file_decodes_binary_metadata():
    for raw in (b'{"License": "cc0"}', memoryview(b'{"License": "cc0"}')):
        repository, _, _ = _repository(("Foo.jpg", None, None, raw))

        file = repository.find_file("Foo.jpg")

        assert file.raw_metadata == '{"License": "cc0"}'
        assert (file.width, file.height) == (0, 0)


def test_find_file_missing_row():
    repository, _, _ = _repository(None)

    assert repository.find_file("Nope.jpg") is None


def test_extended_metadata_shapes(capsys):
    repository = DatabaseFileRepository()

    wrapped = repository.extended_metadata(
        FileRecord(name="A.jpg", raw_metadata='{"NonFree": "1", "License": {"value": "cc-by", "source": "commons"}}')
    )
    assert wrapped == {"NonFree": {"value": "1"}, "License": {"value": "cc-by", "source": "commons"}}

    assert repository.extended_metadata(FileRecord(name="A.jpg")) == {}
    assert repository.extended_metadata(FileRecord(name="A.jpg", raw_metadata='["not", "a", "dict"]')) == {}

    assert repository.extended_metadata(FileRecord(name="A.jpg", raw_metadata="{broken")) == {}
    assert "Unreadable metadata" in capsys.readouterr().out
