#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from typedcms.delivery import DeliveryClient, IteratorDone, ListOptions


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List resolved entries of a content type")
    p.add_argument("content_type", nargs="?", default=None, help="Defaults to the first content type")
    p.add_argument("limit", nargs="?", type=int, default=10, help="Page size")
    p.add_argument("include", nargs="?", type=int, default=2, help="Link depth (0-10)")
    p.add_argument("--max", type=int, default=25, help="Stop after this many entries")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    # Reads TYPEDCMS_SPACE_ID / TYPEDCMS_ACCESS_TOKEN
    async with DeliveryClient.from_env() as client:
        registry = await client.load_schema()
        print("Content types:", ", ".join(f"{m.id} -> {m.name}" for m in registry))

        content_type_id = args.content_type or registry.content_type_ids[0]
        it = client.entries(content_type_id, ListOptions(limit=args.limit, include=args.include))
        for _ in range(args.max):
            try:
                entry = await it.next()
            except IteratorDone:
                break
            print(f"{entry!r} | page={it.page} offset={it.offset}")
        print(f"Total reported by the API: {it.total}")


if __name__ == "__main__":
    asyncio.run(main())
