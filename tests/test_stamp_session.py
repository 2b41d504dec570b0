"""
Integration tests for StampSession.

Tests the full load, remove background, place lines, name, and save flow,
plus failure cases that must leave the session unchanged.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from SM_Libs.config_manager import StampMakerConfig
from SM_Libs.constants import PNG_DATA_URL_PREFIX
from SM_Libs.errors import CodecError, InputError, ValidationError
from SM_Libs.ImageEditingLib.image_models import PixelBuffer, TargetColor
from SM_Libs.LayoutLib.commands import SetLine
from SM_Libs.LayoutLib.reference_lines import LineName
from SM_Libs.LayoutLib.tools import Tool
from SM_Libs.stamp_session import StampSession
from SM_Libs.StampStoreLib.stamp_record import Point
from SM_Libs.StampStoreLib.stamp_store import load_stamp_file


@pytest.fixture
def session(white_stamp_png):
    session = StampSession()
    session.load_image(white_stamp_png)
    return session


def _place_required_lines(session):
    session.click(Tool.HEADER, 0, 10)
    session.click(Tool.FOOTER, 0, 50)
    session.click(Tool.TEXT, 0, 30)
    session.click(Tool.LEFT, 5, 0)
    session.click(Tool.RIGHT, 75, 0)


class TestLoadImage:
    """Tests for loading images into the session."""

    def test_load_resets_lines(self, session, white_stamp_buffer):
        session.set_line("headerBottom", 10)
        session.load_buffer(white_stamp_buffer)
        assert session.lines.header_bottom is None
        assert session.lines.image_width == 80

    def test_failed_load_keeps_previous_image(self, session, tmp_path):
        broken = tmp_path / "broken.png"
        broken.write_bytes(b"garbage")
        before = session.image
        with pytest.raises(CodecError):
            session.load_image(broken)
        assert session.image is before

    def test_operations_need_an_image(self):
        session = StampSession()
        with pytest.raises(InputError):
            session.set_line("headerBottom", 10)
        with pytest.raises(InputError):
            session.remove_background_at(0, 0)

    def test_upload_limit_from_config(self, white_stamp_png):
        session = StampSession(StampMakerConfig(max_upload_bytes=10))
        with pytest.raises(InputError):
            session.load_image(white_stamp_png)


class TestBackgroundRemoval:
    """Tests for background removal within a session."""

    def test_background_tool_removes_picked_color(self, session):
        assert session.click(Tool.BACKGROUND, 0, 0) is None
        assert session.image.target == TargetColor(255, 255, 255)
        assert session.image.processed.pixel_at(0, 0)[3] == 0

    def test_picks_from_original_each_time(self, session):
        session.remove_background_at(0, 0)
        session.remove_background_at(15, 25)
        assert session.image.target == TargetColor(150, 20, 20)
        assert session.image.original.pixel_at(0, 0) == (255, 255, 255, 255)

    def test_revert(self, session):
        session.remove_background_at(0, 0)
        session.revert_to_original()
        assert session.image.processed is None
        assert session.image.export_buffer is session.image.original

    def test_out_of_range_pick_leaves_session(self, session):
        with pytest.raises(InputError):
            session.remove_background_at(80, 0)
        assert session.image.processed is None

    def test_executor_flow(self, session):
        with ThreadPoolExecutor(max_workers=1) as executor:
            pending = session.start_background_removal(0, 0, executor)
            assert session.image.processed is None
            session.finish_background_removal(pending, timeout=30)
        assert session.image.processed.pixel_at(0, 0)[3] == 0

    def test_stale_result_rejected(self, session, white_stamp_buffer):
        with ThreadPoolExecutor(max_workers=1) as executor:
            pending = session.start_background_removal(0, 0, executor)
            session.load_buffer(PixelBuffer(80, 60, white_stamp_buffer.data))
            with pytest.raises(InputError):
                session.finish_background_removal(pending, timeout=30)
        assert session.image.processed is None


class TestLines:
    """Tests for placing reference lines through the session."""

    def test_click_tools(self, session):
        _place_required_lines(session)
        assert session.lines.header_bottom == 10
        assert session.lines.left_start == 5
        assert session.lines.is_export_ready()

    def test_none_tool_places_nothing(self, session):
        before = session.lines
        assert session.click(Tool.NONE, 1, 1) is None
        assert session.lines is before

    def test_unknown_tool(self, session):
        with pytest.raises(InputError):
            session.click("lasso", 1, 1)

    def test_manual_entry(self, session):
        session.enter_line("textLine", "30")
        assert session.lines.text_line == 30
        session.enter_line("textLine", "")
        assert session.lines.text_line is None

    def test_manual_entry_rejects_text(self, session):
        session.enter_line("textLine", "30")
        with pytest.raises(InputError):
            session.enter_line("textLine", "thirty")
        assert session.lines.text_line == 30

    def test_letter_lines_use_configured_spacing(self, white_stamp_buffer):
        session = StampSession(StampMakerConfig(letter_line_min_spacing=5))
        session.load_buffer(white_stamp_buffer)
        session.click(Tool.LETTER, 20, 0)
        with pytest.raises(InputError):
            session.click(Tool.LETTER, 24, 0)
        session.enter_letter_line("26")
        assert session.lines.letter_lines == (20, 26)

    def test_empty_letter_entry_is_ignored(self, session):
        assert session.enter_letter_line(" ") is None
        assert session.lines.letter_lines == ()

    def test_remove_and_clear(self, session):
        session.add_letter_line(20)
        session.add_letter_line(40)
        session.remove_letter_line(0)
        assert session.lines.letter_lines == (40,)
        session.apply(SetLine(LineName.TEXT_LINE, 3))
        session.clear_lines()
        assert session.lines.text_line is None
        assert session.lines.letter_lines == ()


class TestExport:
    """Tests for the checklist, record export and saving."""

    def test_checklist(self, session):
        session.set_line("headerBottom", 10)
        checklist = {item.field: item.done for item in session.export_checklist()}
        assert checklist == {
            "name": False,
            "image": True,
            "headerBottom": True,
            "footerTop": False,
            "textLine": False,
            "leftStart": False,
            "rightStart": False,
        }

    def test_checklist_without_image(self):
        assert not any(item.done for item in StampSession().export_checklist())

    def test_export_needs_name(self, session):
        _place_required_lines(session)
        with pytest.raises(ValidationError) as excinfo:
            session.export_record()
        assert excinfo.value.fields == ["name"]

    def test_full_flow(self, session, tmp_path):
        session.click(Tool.BACKGROUND, 0, 0)
        _place_required_lines(session)
        session.click(Tool.LETTER, 40, 30)
        session.click(Tool.LETTER, 20, 30)
        session.set_name("Test")

        path = session.save(tmp_path)

        assert path == tmp_path / "Test.stamp"
        record = load_stamp_file(path)
        assert record.font_size == 21
        assert record.base_coordinate == (Point(20, 30), Point(40, 30))
        assert record.image_data.startswith(PNG_DATA_URL_PREFIX)

    def test_bare_base64_from_config(self, white_stamp_buffer):
        session = StampSession(StampMakerConfig(embed_data_url=False))
        session.load_buffer(white_stamp_buffer)
        _place_required_lines(session)
        session.set_name("Test")
        assert not session.export_record().image_data.startswith("data:")

    def test_save_uses_configured_output_dir(self, white_stamp_buffer, tmp_path):
        session = StampSession(StampMakerConfig(output_dir=str(tmp_path / "stamps")))
        session.load_buffer(white_stamp_buffer)
        _place_required_lines(session)
        session.set_name("Test")
        assert session.save().parent == tmp_path / "stamps"

    def test_strict_ordering_from_config(self, white_stamp_buffer):
        session = StampSession(StampMakerConfig(strict_ordering=True))
        session.load_buffer(white_stamp_buffer)
        _place_required_lines(session)
        session.set_line("headerBottom", 55)
        session.set_name("Test")
        with pytest.raises(ValidationError):
            session.export_record()
