"""Interactive console application for processing wallet dumps into reports."""

import sys
from dataclasses import replace
from pathlib import Path
from typing import cast

from ton_dump_processor import ui
from ton_dump_processor.config import ProcessingLogs
from ton_dump_processor.processor import DumpProcessor, RunResult
from ton_dump_processor.settings import ProcessorSettings

_RUN_EXCEPTIONS = (
    ArithmeticError,
    AttributeError,
    LookupError,
    OSError,
    RuntimeError,
    TypeError,
    UnicodeError,
    ValueError,
)


class App:
    """Stateful interactive console app for building dump reports."""

    def __init__(self, settings: ProcessorSettings | None = None) -> None:
        """Load settings and initialize in-session run cache."""
        self.settings = settings or ProcessorSettings.load()
        self.run_result: RunResult | None = None
        self.logs = ProcessingLogs()

    def run(self) -> None:
        """Run interactive command loop."""
        while True:
            action = ui.prompt_for_main_menu_action(self.settings, self.run_result is not None)
            getattr(self, action)()

    def process(self) -> None:
        """CLI command: process every dump of the input directory."""
        self._reset()
        processor = DumpProcessor(self.settings, self.logs)
        try:
            self.run_result = processor.run(progress=ui.print_progress)
        except _RUN_EXCEPTIONS as error:
            self._reset()
            self._show_error(error)
            return
        finally:
            ui.clear_progress()
        self.show()

    def show(self) -> None:
        """CLI command: display last processed run in this session."""
        ui.print_run_result(cast(RunResult, self.run_result), self.settings, self.logs)
        ui.wait_for_back_navigation()

    def set_input_dir(self) -> None:
        """CLI command: point the session at another dump directory."""
        answer = ui.prompt_for_input_dir()
        if answer == ui.BACK:
            return
        self.settings = replace(self.settings, input_dir=Path(answer).expanduser().resolve())
        self._reset()

    def exit_app(self) -> None:
        """Exit interactive run loop."""
        self._reset()
        sys.exit(0)

    def _reset(self) -> None:
        """Reset in-session run cache."""
        self.run_result = None
        self.logs.clear()

    def _show_error(self, error: Exception) -> None:
        """Display framed processing error and wait for dismissal."""
        ui.print_run_error(error)
        ui.wait_for_back_navigation()


def main() -> None:
    """CLI entrypoint with clean Ctrl-C exit code."""
    app = App()
    try:
        app.run()
    except KeyboardInterrupt:
        app.exit_app()


if __name__ == "__main__":
    main()
