from pathlib import Path

import pytest

from vision_batch.models import AnalysisResult, PersistenceFailed
from vision_batch.sink import ResultSink, TextFileSink, format_record


def make_result(description="a dog", face_count=1, tags=("dog", "outdoor")) -> AnalysisResult:
    return AnalysisResult(description=description, face_count=face_count, tags=tags)


# --- format_record ---

def test_format_record_exact_layout():
    record = format_record("https://x/a.jpg", make_result())

    assert record == (
        "imageURL: https://x/a.jpg\n"
        "suggestedDescription: a dog\n"
        "hasHumanFaceOnImage: true\n"
        "numberOfFacesDetected: 1\n"
        "suggestedKeywords: [dog, outdoor]\n"
        "\n"
    )


def test_format_record_no_faces():
    record = format_record("u", make_result(face_count=0))

    assert "hasHumanFaceOnImage: false\n" in record
    assert "numberOfFacesDetected: 0\n" in record


def test_format_record_no_tags():
    assert "suggestedKeywords: []\n" in format_record("u", make_result(tags=()))


# --- TextFileSink ---

def test_text_file_sink_implements_abc():
    assert issubclass(TextFileSink, ResultSink)


def test_initialize_creates_empty_file(tmp_path):
    path = tmp_path / "out" / "descriptions.txt"
    sink = TextFileSink(path)

    sink.initialize()

    assert path.read_text(encoding="utf-8") == ""


def test_initialize_truncates_previous_run(tmp_path):
    path = tmp_path / "descriptions.txt"
    path.write_text("imageURL: old\n\n", encoding="utf-8")
    sink = TextFileSink(path)

    sink.initialize()

    assert path.read_text(encoding="utf-8") == ""


def test_initialize_failure_raises(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    sink = TextFileSink(blocker / "descriptions.txt")

    with pytest.raises(OSError):
        sink.initialize()


def test_append_preserves_call_order(tmp_path):
    path = tmp_path / "descriptions.txt"
    sink = TextFileSink(path)
    sink.initialize()

    assert sink.append("a", "first\n") is None
    assert sink.append("b", "second\n") is None

    assert path.read_text(encoding="utf-8") == "first\nsecond\n"


def test_append_writes_utf8(tmp_path):
    path = tmp_path / "descriptions.txt"
    sink = TextFileSink(path)
    sink.initialize()

    sink.append("u", "Stadtschloss Kuppeldecke — Würzburg\n")

    assert path.read_bytes().decode("utf-8") == "Stadtschloss Kuppeldecke — Würzburg\n"


def test_append_before_initialize_fails(tmp_path):
    sink = TextFileSink(tmp_path / "descriptions.txt")

    result = sink.append("u", "record\n")

    assert isinstance(result, PersistenceFailed)
    assert result.reference == "u"
    assert not (tmp_path / "descriptions.txt").exists()


def test_append_io_error_reports_failure(tmp_path):
    path = tmp_path / "descriptions.txt"
    sink = TextFileSink(path)
    sink.initialize()
    path.unlink()
    path.mkdir()

    result = sink.append("u", "record\n")

    assert isinstance(result, PersistenceFailed)
    assert isinstance(result.cause, OSError)


def test_default_path():
    assert TextFileSink().path == Path("./image_descriptions.txt")


def test_sink_path_is_part_of_interface():
    assert "path" in ResultSink.__abstractmethods__
