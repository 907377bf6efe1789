"""Tests for documentation appenders and render log sinks."""

import logging
from pathlib import Path

import pytest

from typeweave.core.config import OutputMode
from typeweave.core.model import ClassSpec, EnumSpec, EnumValueSpec, ModuleSpec, TypeModel
from typeweave.generator import (
    CommentDocAppender,
    DeclarationGenerator,
    DocAppender,
    FileRenderLog,
    LoggerRenderLog,
    NullDocAppender,
    RenderLog,
)

from factories import NUMBER, prop


@pytest.fixture
def documented_model() -> TypeModel:
    return TypeModel(
        modules=[
            ModuleSpec(
                name="Geo",
                classes=[
                    ClassSpec(
                        name="Point",
                        full_name="Geo.Point",
                        doc="A point.\n\nIn the plane.",
                        properties=[prop("x", NUMBER, doc="Horizontal")],
                        constants=[
                            prop("ORIGIN", NUMBER, is_constant=True, constant_value=0, doc="Zero")
                        ],
                    )
                ],
                enums=[
                    EnumSpec(
                        name="Color",
                        full_name="Geo.Color",
                        doc="Colors",
                        values=[EnumValueSpec(name="Red", value=0, doc="Warm")],
                    )
                ],
            )
        ]
    )


class TestDocAppenders:
    def test_appenders_satisfy_protocol(self) -> None:
        assert isinstance(NullDocAppender(), DocAppender)
        assert isinstance(CommentDocAppender(), DocAppender)

    def test_null_appender_adds_nothing(self, documented_model: TypeModel) -> None:
        assert "/**" not in DeclarationGenerator().generate(documented_model)

    def test_comment_appender(self, documented_model: TypeModel) -> None:
        generator = DeclarationGenerator()
        generator.set_doc_appender(CommentDocAppender())

        output = generator.generate(documented_model)

        assert "\t/** Colors */\n\texport const enum Color {\n\t\t/** Warm */\n\t\tRed = 0\n" in output
        assert "\t/**\n\t * A point.\n\t *\n\t * In the plane.\n\t */\n\texport interface Point {\n" in output
        assert "\t\t/** Horizontal */\n\t\tx: number;\n" in output

    def test_constant_doc(self, documented_model: TypeModel) -> None:
        generator = DeclarationGenerator()
        generator.set_doc_appender(CommentDocAppender())

        output = generator.generate(documented_model, OutputMode.CONSTANTS)

        assert "\t\t/** Zero */\n\t\texport const ORIGIN = 0;\n" in output

    def test_custom_appender_sees_rendered_names(self, documented_model: TypeModel) -> None:
        calls = []

        class Recorder(NullDocAppender):
            def append_property_doc(self, sb, prop, name, type_name):
                calls.append((name, type_name))

        generator = DeclarationGenerator()
        generator.set_doc_appender(Recorder())
        generator.generate(documented_model)

        assert calls == [("x", "number")]


class TestRenderLog:
    def test_sinks_satisfy_protocol(self, tmp_path: Path) -> None:
        assert isinstance(LoggerRenderLog(), RenderLog)
        assert isinstance(FileRenderLog(tmp_path / "render.log"), RenderLog)

    def test_logger_sink(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="typeweave.render"):
            LoggerRenderLog()("Skipping module 'X'")
            LoggerRenderLog()("")

        assert [r.getMessage() for r in caplog.records] == ["Skipping module 'X'"]

    def test_file_sink_is_lazy(self, tmp_path: Path) -> None:
        path = tmp_path / "logs" / "render.log"

        with FileRenderLog(path) as log:
            assert not path.exists()
            log("first")
            log("second")

        assert path.read_text(encoding="utf-8") == "first\nsecond\n"

    def test_generator_reports_skips(self) -> None:
        messages: list[str] = []
        model = TypeModel(
            modules=[
                ModuleSpec(
                    name="M",
                    classes=[ClassSpec(name="Gone", full_name="M.Gone", is_ignored=True)],
                )
            ]
        )

        DeclarationGenerator(log=messages.append).generate(model)

        assert "Skipping ignored class M.Gone" in messages
        assert any(m.startswith("Skipping module 'M'") for m in messages)

    def test_generate_file_logs_path(self, tmp_path: Path, documented_model: TypeModel) -> None:
        messages: list[str] = []
        path = tmp_path / "out" / "geo.d.ts"

        result = DeclarationGenerator(log=messages.append).generate_file(documented_model, path)

        assert path.read_text(encoding="utf-8") == result.text
        assert result.files_created == [path]
        assert messages[-1] == f"Wrote {path}"
