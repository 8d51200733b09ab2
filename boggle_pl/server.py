import logging

from fastapi import FastAPI, Request, HTTPException, BackgroundTasks
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from boggle_pl.settings import settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("boggle_pl")

# Populated at startup
_trie = None


async def _read_json(request: Request) -> dict:
    body = await request.body()
    if not body:
        return {}
    try:
        data = await request.json()
    except ValueError:
        raise HTTPException(400, "Request body is not valid JSON")
    if not isinstance(data, dict):
        raise HTTPException(400, "Request body must be a JSON object")
    return data


def _int_field(data: dict, name: str, default: int) -> int:
    value = data.get(name, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise HTTPException(400, f"'{name}' must be an integer")
    return value


def _apply_log_level() -> None:
    # DEBUG switches the package logger to debug output; otherwise it inherits
    logger.setLevel(logging.DEBUG if settings.DEBUG else logging.NOTSET)


def create_app() -> FastAPI:
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        global _trie

        _apply_log_level()
        from boggle_pl.cache import load_or_build_trie
        from boggle_pl.errors import DictionaryUnavailable
        logger.info("Loading trie for %s (cache=%s)", settings.DICTIONARY_PATH, settings.CACHE_ENABLED)
        try:
            _trie, cache_hit = await run_in_threadpool(
                load_or_build_trie, settings.DICTIONARY_PATH, settings.DICT_MIN_WORD_LENGTH, settings.CACHE_ENABLED
            )
            logger.info("Trie loaded (cache_hit=%s)", cache_hit)
        except DictionaryUnavailable as e:
            logger.error("%s; /solve and /play will return 503", e)

        yield

        _trie = None

    application = FastAPI(title="Polish Boggle", lifespan=lifespan)

    def _solve(board, min_length: int, background_tasks: BackgroundTasks, timer) -> dict:
        from boggle_pl.errors import BoggleError
        from boggle_pl.notifier import send_notification
        from boggle_pl.solver import find_words, sort_words

        if _trie is None:
            raise HTTPException(503, "Dictionary not loaded")

        with timer.stage("solve"):
            try:
                all_words = sort_words(find_words(board, _trie, min_length))
            except (BoggleError, ValueError) as e:
                raise HTTPException(400, str(e))

        words = all_words[:settings.MAX_RESULTS] if settings.MAX_RESULTS > 0 else all_words
        logger.info("Found %d words (returning %d)", len(all_words), len(words))

        if settings.NTFY_TOPIC:
            background_tasks.add_task(
                send_notification, all_words, board, settings.NTFY_TOPIC,
                settings.NTFY_URL, settings.NOTIFY_WORDS_PER_GROUP,
            )

        return {
            "board": [list(row) for row in board],
            "words": words,
            "word_count": len(words),
            "processing_time": timer.total_ms,
            "stage_timings": timer.summary(),
        }

    def _generate(rows: int, cols: int, timer):
        from boggle_pl.dice import dice_for_board_size, generate_board
        from boggle_pl.errors import BoggleError

        if rows > settings.MAX_BOARD_SIDE or cols > settings.MAX_BOARD_SIDE:
            raise HTTPException(400, f"Board sides are limited to {settings.MAX_BOARD_SIDE}")
        with timer.stage("board"):
            try:
                return generate_board(dice_for_board_size(rows * cols), rows, cols, settings.FACES_PER_DIE)
            except BoggleError as e:
                raise HTTPException(400, str(e))

    @application.get("/health")
    async def health():
        return {"status": "ok", "trie_loaded": _trie is not None}

    @application.post("/board")
    async def board(request: Request):
        from boggle_pl.metrics import StageTimer

        data = await _read_json(request)
        rows = _int_field(data, "rows", settings.BOARD_ROWS)
        cols = _int_field(data, "cols", settings.BOARD_COLS)
        generated = _generate(rows, cols, StageTimer())
        return JSONResponse({"rows": rows, "cols": cols, "board": [list(row) for row in generated]})

    @application.post("/solve")
    async def solve(request: Request, background_tasks: BackgroundTasks):
        from boggle_pl.metrics import StageTimer

        data = await _read_json(request)
        if "board" not in data:
            raise HTTPException(400, "Missing 'board'")
        min_length = _int_field(data, "min_length", settings.MIN_WORD_LENGTH)
        result = _solve(data["board"], min_length, background_tasks, StageTimer())
        return JSONResponse(result)

    @application.post("/play")
    async def play(request: Request, background_tasks: BackgroundTasks):
        from boggle_pl.metrics import StageTimer

        data = await _read_json(request)
        rows = _int_field(data, "rows", settings.BOARD_ROWS)
        cols = _int_field(data, "cols", settings.BOARD_COLS)
        min_length = _int_field(data, "min_length", settings.MIN_WORD_LENGTH)
        timer = StageTimer()
        generated = _generate(rows, cols, timer)
        return JSONResponse(_solve(generated, min_length, background_tasks, timer))

    @application.get("/api/settings")
    async def api_get_settings():
        from boggle_pl.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from boggle_pl.settings import update_settings, get_editable_settings
        body = await _read_json(request)
        errors = update_settings(settings, **body)
        _apply_log_level()
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


def main():
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)


app = create_app()


if __name__ == "__main__":
    main()
