from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock, patch

from csv_preview.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    with patch('sys.stdout.isatty', return_value=True):
        assert is_tty_enabled() is True
    with patch('sys.stdout.isatty', return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:

    def test_init_with_tty_enabled(self):
        with patch('csv_preview.services.progress.is_tty_enabled', return_value=True), \
             patch('csv_preview.services.progress.tqdm') as mock_tqdm:
            tracker = ProgressTracker(5, description="Test files")

            assert tracker.enabled is True
            mock_tqdm.assert_called_once_with(
                total=5,
                desc="Test files",
                unit="file",
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )

    def test_init_with_tty_disabled(self):
        with patch('csv_preview.services.progress.is_tty_enabled', return_value=False):
            tracker = ProgressTracker(5)
            assert tracker.enabled is False
            assert tracker.pbar is None
            # all calls are no-ops
            tracker.start_file(Path("a.csv"))
            tracker.set_postfix(parsed=1)
            tracker.finish_file()
            tracker.close()
            assert tracker.current_file == 1

    def test_file_lifecycle_updates_bar(self):
        mock_pbar = Mock()
        with patch('csv_preview.services.progress.is_tty_enabled', return_value=True), \
             patch('csv_preview.services.progress.tqdm', return_value=mock_pbar):
            tracker = ProgressTracker(2, description="Previewing")
            tracker.start_file(Path("data/a.csv"))
            mock_pbar.set_description.assert_called_with("Previewing (a.csv)")
            tracker.set_postfix(parsed=1, failed=0)
            mock_pbar.set_postfix.assert_called_once_with(parsed=1, failed=0)
            tracker.finish_file(success=True)
            mock_pbar.update.assert_called_once_with(1)
            mock_pbar.set_description.assert_called_with("Previewing")

    def test_context_manager_closes(self):
        mock_pbar = Mock()
        with patch('csv_preview.services.progress.is_tty_enabled', return_value=True), \
             patch('csv_preview.services.progress.tqdm', return_value=mock_pbar):
            with ProgressTracker(1) as tracker:
                assert tracker.pbar is mock_pbar
            mock_pbar.close.assert_called_once()
            assert tracker.pbar is None
