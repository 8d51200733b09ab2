import logging
from collections import defaultdict
from typing import Sequence

import httpx

logger = logging.getLogger("boggle_pl")


def format_notification(words: Sequence[str], board: Sequence[Sequence[str]], words_per_group: int = 10) -> tuple[str, str]:
    """Build (title, body): up to ``words_per_group`` words per length, then per-length counts."""
    by_length: dict[int, list[str]] = defaultdict(list)
    for w in words:
        by_length[len(w)].append(w)

    title = f"Boggle {len(board)}x{len(board[0]) if board else 0} - {len(words)} words"

    selected = []
    for length in sorted(by_length):
        selected.extend(by_length[length][:words_per_group])

    counts = " | ".join(f"{l}L:{len(g)}" for l, g in sorted(by_length.items()))
    board_str = " / ".join(" ".join(row) for row in board)
    body = board_str + "\n\n" + ",".join(selected) + "\n\n" + counts
    return title, body


async def send_notification(
    words: Sequence[str],
    board: Sequence[Sequence[str]],
    topic: str,
    ntfy_url: str = "https://ntfy.sh",
    words_per_group: int = 10,
):
    """Send solve results to ntfy.sh. Best-effort: failures are logged, not raised."""
    try:
        title, body = format_notification(words, board, words_per_group)

        async with httpx.AsyncClient(timeout=10.0) as client:
            resp = await client.post(
                f"{ntfy_url}/{topic}",
                content=body.encode("utf-8"),
                headers={
                    "Title": title,
                    "Priority": "default",
                    "Tags": "game_die",
                },
            )
            resp.raise_for_status()
            logger.info("Notification sent to %s/%s (status %d)", ntfy_url, topic, resp.status_code)

    except Exception as e:
        logger.error("Failed to send notification: %s", e)
