import asyncio
import json
import logging
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.app.dependencies import get_linkograph_service  # noqa: E402

SAMPLE_TRAIL = """\
Start stream intro
Play game match 1
Commentate on gameplay
Check OBS bitrate
Read chat message
Reply to viewer
Play game match 1
Monitor analytics
Troubleshoot audio lag
Play game match 2
"""


async def run(text: str) -> None:
    logger = logging.getLogger("linkograph.run")
    start = time.perf_counter()
    service = get_linkograph_service()

    status = await service.start()
    logger.info(
        "strategy resolved in %.2fs: status=%s",
        time.perf_counter() - start,
        status.value,
    )

    view = await service.analyze(text)
    logger.info("linkograph ready in %.2fs", time.perf_counter() - start)

    for link in view["active_links"]:
        logger.info(
            "link %s -> %s score=%.3f weight=%.3f",
            link["later"],
            link["earlier"],
            link["score"],
            link["weight"],
        )
    logger.info(json.dumps(view["metrics"], indent=2))

    if not view["active_links"]:
        logger.warning(
            "no active links at threshold %.2f; try lowering LINKOGRAPH_THRESHOLD",
            view["threshold"],
        )

    service.close()


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    text = SAMPLE_TRAIL
    if len(sys.argv) > 1:
        text = Path(sys.argv[1]).read_text(encoding="utf-8")
    asyncio.run(run(text))


if __name__ == "__main__":
    main()
