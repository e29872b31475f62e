"""Console-driven session loop for Wayfarer."""
from __future__ import annotations

import logging
import secrets
import sys
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import List, Literal, Sequence

from wayfarer.core.clock import Clock, SystemClock
from wayfarer.core.rng import RNG
from wayfarer.core.terminal import Terminal
from wayfarer.data.errors import DataError
from wayfarer.data.repositories import FIRST_CHAPTER_ID, ChaptersRepository
from wayfarer.presentation.cli.config import (
    CommandLineOptions,
    get_default_config_path,
    get_error_log_path,
    get_log_path,
    get_status_path,
    get_user_data_dir,
    load_config,
    parse_options,
    save_config,
)
from wayfarer.presentation.cli.console import ConsoleTerminal
from wayfarer.presentation.cli.error_log import write_error_log
from wayfarer.presentation.cli.nodes import CliNodeDispatcher, NodeContext
from wayfarer.presentation.cli.platform import CallbackPump, NullPlatform
from wayfarer.presentation.cli.render import Typist
from wayfarer.services import (
    CombatService,
    ConditionEvaluator,
    FileStatusStore,
    GameEngine,
    QteService,
    StatusStore,
)
from wayfarer.services.chapter_graph_validator import format_issue, has_errors, validate_chapters

logger = logging.getLogger(__name__)

MenuAction = Literal["play", "toggle_text", "quit"]
_MAX_RANDOM_SEED = 2**31 - 1
TITLE = "W A Y F A R E R"


@dataclass
class GameSession:
    """Everything one run of the game needs, wired together."""

    terminal: Terminal
    typist: Typist
    engine: GameEngine
    chapters_repo: ChaptersRepository
    status_store: StatusStore
    config_path: Path | None = None


def build_session(
    terminal: Terminal,
    *,
    status_store: StatusStore,
    chapters_repo: ChaptersRepository | None = None,
    clock: Clock | None = None,
    rng: RNG | None = None,
    instant: bool = False,
    show_node_ids: bool = False,
    config_path: Path | None = None,
) -> GameSession:
    """Construct the engine with concrete services."""
    clock = clock or SystemClock()
    rng = rng or RNG(secrets.randbelow(_MAX_RANDOM_SEED))
    chapters_repo = chapters_repo or ChaptersRepository()
    typist = Typist(terminal, clock, instant=instant, show_node_ids=show_node_ids)
    context = NodeContext(
        typist=typist,
        status_store=status_store,
        conditions=ConditionEvaluator(status_store),
        qte=QteService(terminal, rng, clock),
        combat=CombatService(rng),
    )
    engine = GameEngine(chapters_repo, status_store, CliNodeDispatcher(context))
    return GameSession(
        terminal=terminal,
        typist=typist,
        engine=engine,
        chapters_repo=chapters_repo,
        status_store=status_store,
        config_path=config_path,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Start the interactive CLI session and return the process exit code."""
    options = parse_options(argv)
    data_dir = options.data_dir or get_user_data_dir()
    configure_logging(get_log_path(data_dir), debug=options.debug)
    logger.info("Starting with options %s", options)

    if options.validate:
        return run_validation(ChaptersRepository(), ConsoleTerminal())

    terminal = ConsoleTerminal()
    session: GameSession | None = None
    pump = nullcontext() if options.skip_steam else CallbackPump(NullPlatform())
    try:
        with pump:
            config_path = get_default_config_path(data_dir)
            config = load_config(config_path)
            session = build_session(
                terminal,
                status_store=FileStatusStore(get_status_path(data_dir)),
                instant=options.debug or config["text_display_mode"] == "instant",
                show_node_ids=options.debug,
                config_path=config_path,
            )
            if options.has_entry_point:
                _run_entry_point(session, options)
            else:
                run_main_menu(session)
    except KeyboardInterrupt:
        terminal.write_line()
        logger.info("Interrupted by user.")
    except Exception as exc:
        chapter_id, node_id = _current_position(session)
        logger.exception("Fatal error at chapter %s node %s", chapter_id, node_id)
        write_error_log(exc, chapter_id, node_id, get_error_log_path(data_dir))
        terminal.write_line()
        terminal.write_line(f"A fatal error occurred: {exc}", "red")
        terminal.write_line(f"Details were written to {get_error_log_path(data_dir)}.")
        return 1
    terminal.write_line("Goodbye!")
    return 0


def configure_logging(log_path: Path, *, debug: bool = False) -> None:
    """Send log records to a file so they never mix with the game screen."""
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        return
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        filename=str(log_path),
        encoding="utf-8",
    )


def run_validation(chapters_repo: ChaptersRepository, terminal: Terminal) -> int:
    """Print graph issues for the bundled chapters; non-zero when any is an error."""
    combat = CombatService(RNG(0))
    try:
        chapters = chapters_repo.all()
    except DataError as exc:
        terminal.write_line(f"[ERROR] DATA_LOAD: {exc}")
        return 1
    issues = validate_chapters(chapters, has_prowess=combat.has_prowess)
    for issue in issues:
        terminal.write_line(format_issue(issue))
    if not issues:
        terminal.write_line(f"{len(chapters)} chapter(s) validated, no issues found.")
    return 1 if has_errors(issues) else 0


def run_main_menu(session: GameSession) -> None:
    """Loop the main menu until the player quits."""
    while True:
        status = session.status_store.status
        if not status.has_progress:
            _welcome(session)
            session.engine.start_chapter(FIRST_CHAPTER_ID)
            continue
        action, chapter_id = _main_menu_loop(session)
        if action == "quit":
            return
        if action == "toggle_text":
            _toggle_text_mode(session)
            continue
        session.engine.start_chapter(chapter_id)


def _welcome(session: GameSession) -> None:
    session.terminal.clear()
    session.typist.render_heading(TITLE)
    session.typist.render_text(
        "Welcome, traveller. The road is long and the night is longer.",
        flowing=False,
    )
    session.typist.line("Use the arrow keys when the road asks for quick reflexes.", "dark_gray")
    session.typist.wait_for_key()


def _main_menu_loop(session: GameSession) -> tuple[MenuAction, int]:
    chapters = _menu_chapters(session)
    mode = "instant" if session.typist.instant else "typewriter"
    while True:
        session.typist.render_heading(TITLE)
        session.typist.render_menu([label for _, label in chapters])
        session.typist.line(f"t. Text display: {mode}")
        session.typist.line("q. Quit")
        raw = session.terminal.read_line("Select a chapter: ").strip().lower()
        if raw == "q":
            return "quit", 0
        if raw == "t":
            return "toggle_text", 0
        try:
            index = int(raw) - 1
        except ValueError:
            session.typist.line("Please enter a chapter number, t or q.")
            continue
        if 0 <= index < len(chapters):
            return "play", chapters[index][0]
        session.typist.line(f"Please enter a value between 1 and {len(chapters)}.")


def _menu_chapters(session: GameSession) -> List[tuple[int, str]]:
    last = session.status_store.status.last_started_chapter or FIRST_CHAPTER_ID
    entries: List[tuple[int, str]] = []
    for chapter_id in range(FIRST_CHAPTER_ID, last + 1):
        if not session.chapters_repo.has(chapter_id):
            break
        entries.append((chapter_id, f"Chapter {chapter_id}: {session.chapters_repo.get(chapter_id).title}"))
    return entries


def _toggle_text_mode(session: GameSession) -> None:
    session.typist.instant = not session.typist.instant
    mode = "instant" if session.typist.instant else "typewriter"
    if session.config_path is not None:
        try:
            save_config({"text_display_mode": mode}, session.config_path)
        except OSError:
            logger.warning("Could not save config to %s", session.config_path)
    session.typist.line(f"Text display set to {mode}.")


def _run_entry_point(session: GameSession, options: CommandLineOptions) -> None:
    chapter_id = options.chapter
    if chapter_id is None:
        chapter_id = session.status_store.status.last_started_chapter or FIRST_CHAPTER_ID
    node_id = options.node if options.node is not None else 1
    logger.info("Debug entry at chapter %d node %d", chapter_id, node_id)
    session.engine.jump_to(chapter_id, node_id)


def _current_position(session: GameSession | None) -> tuple[int | None, int | None]:
    if session is None:
        return None, None
    engine = session.engine
    chapter_id = engine.current_chapter.id if engine.current_chapter is not None else None
    node_id = engine.current_node.id if engine.current_node is not None else None
    return chapter_id, node_id


if __name__ == "__main__":
    sys.exit(main())
