# shinobi_backend/services/discord_service.py
# Best-effort audit notifications to a Discord channel webhook.

import logging
from typing import List, Optional

import httpx

from shinobi_backend.core import config

logger = logging.getLogger(__name__)

# Discord rejects embed descriptions above 4096 characters
MAX_DESCRIPTION = 4000


def build_payload(actor_name: str, target_name: str, changes: List[str], avatar: Optional[str] = None) -> dict:
    embed = {
        "title": f"{actor_name} updated {target_name}",
        "description": "\n".join(f"• {c}" for c in changes)[:MAX_DESCRIPTION] or "No changes",
    }
    if avatar:
        embed["thumbnail"] = {"url": avatar}
    return {"username": "Shinobi Audit", "embeds": [embed]}


async def call_discord(
    actor_name: str,
    target_name: str,
    changes: List[str],
    avatar: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> bool:
    """
    Post a change summary to the configured webhook.
    Returns True when Discord accepted it. Never raises: the data change it reports
    has already been committed.
    """
    webhook_url = config.DISCORD_WEBHOOK_URL
    if not webhook_url:
        return False

    payload = build_payload(actor_name, target_name, changes, avatar)
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=config.DISCORD_TIMEOUT_SECONDS) as own_client:
                response = await own_client.post(webhook_url, json=payload)
        else:
            response = await client.post(webhook_url, json=payload)
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("⚠️ Discord notification for %s failed: %s", target_name, e)
        return False

    return True
