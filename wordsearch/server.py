import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from wordsearch.settings import settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("wordsearch")


def create_app() -> FastAPI:
    application = FastAPI(title="Word Search Solver")

    @application.get("/health")
    async def health():
        return {"status": "ok"}

    @application.post("/solve")
    async def solve(request: Request):
        from wordsearch.metrics import StageTimer
        from wordsearch.parser import PuzzleFormatError, parse_text
        from wordsearch.results import ResultCollector
        from wordsearch.solver import solve_puzzle

        data = await request.body()
        logger.info("POST /solve (%d bytes)", len(data))
        if not data:
            raise HTTPException(400, "Empty request body, no puzzle text received")
        if len(data) > settings.MAX_UPLOAD_BYTES:
            raise HTTPException(413, f"Puzzle too large (max {settings.MAX_UPLOAD_BYTES} bytes)")

        timer = StageTimer()

        with timer.stage("parse"):
            try:
                text = data.decode(settings.INPUT_ENCODING)
            except UnicodeDecodeError as e:
                raise HTTPException(400, f"Could not decode body as {settings.INPUT_ENCODING}: {e}")
            try:
                puzzles = parse_text(text)
            except PuzzleFormatError as e:
                logger.warning("Rejected puzzle: %s", e)
                raise HTTPException(400, str(e))

        if settings.MAX_WORD_LENGTH:
            for puzzle in puzzles:
                too_long = [w for w in puzzle.words if len(w) > settings.MAX_WORD_LENGTH]
                if too_long:
                    raise HTTPException(
                        400,
                        f"Query {puzzle.index}: word(s) longer than {settings.MAX_WORD_LENGTH}: "
                        + ", ".join(too_long),
                    )

        queries = []
        collector = ResultCollector()
        for n, puzzle in enumerate(puzzles, start=1):
            # off the event loop
            with timer.stage("search"):
                await run_in_threadpool(solve_puzzle, puzzle, collector)
            paths = collector.sorted_lines()
            collector.reset()
            queries.append({
                "query": n,
                "rows": puzzle.grid.rows,
                "columns": puzzle.grid.columns,
                "words": list(puzzle.words),
                "paths": paths,
            })
            if settings.DEBUG:
                logger.info("Query %d grid:\n%s", n, puzzle.grid)

        logger.info("Solved %d quer(ies), %d path(s) total",
                    len(queries), sum(len(q["paths"]) for q in queries))
        if settings.LOG_TIMINGS:
            timer.log_summary()

        return JSONResponse({
            "queries": queries,
            "query_count": len(queries),
            "stage_timings": timer.summary(),
        })

    @application.get("/api/settings")
    async def api_get_settings():
        from wordsearch.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from wordsearch.settings import update_settings, get_editable_settings
        try:
            body = await request.json()
        except ValueError as e:
            raise HTTPException(400, f"Request body is not valid JSON: {e}")
        if not isinstance(body, dict):
            raise HTTPException(400, "Expected a JSON object of setting names to values")
        if not body:
            raise HTTPException(400, "No settings given")
        errors = update_settings(settings, **body)
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


app = create_app()
