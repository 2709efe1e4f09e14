"""DeepSearch - multi-perspective research reports

Simple CLI for running a report and exporting it as PDF.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from deepsearch.agents.orchestrator import ReportPipeline
from deepsearch.document.emitter import render_pdf, suggested_filename
from deepsearch.document.layout import DocumentLayoutEngine
from deepsearch.models.schemas import ContentBlock


async def run_report(
    topic: str,
    *,
    search_enabled: bool = True,
    fast: bool = False,
) -> tuple[list[ContentBlock], bool]:
    """Run the pipeline on `topic`, printing events; return (blocks, succeeded)."""
    print(f"Report topic: {topic}")
    print("-" * 50)

    pipeline = ReportPipeline(
        search_enabled=search_enabled,
        pacing_ms=(0, 0) if fast else None,
    )
    blocks: list[ContentBlock] = []
    succeeded = False

    async for event in pipeline.run(topic):
        event_type = event.event.value
        data = event.data

        if event_type == "progress":
            print(f"\n[~] {data.get('message', '')}")

        elif event_type == "result":
            block = ContentBlock(**data["result"])
            blocks.append(block)
            print(f"  [+] {block.title}")
            print(f"      {block.content[:120]}...")

        elif event_type == "complete":
            print(f"\n[*] Report complete: {len(blocks)} sections")
            succeeded = True

        elif event_type == "failure":
            print(f"\n[!] Error: {data.get('reason', 'Unknown error')}")

    return blocks, succeeded


def write_pdf(topic: str, blocks: list[ContentBlock], output: Path) -> Path:
    if output.is_dir():
        output = output / suggested_filename(topic)
    document = DocumentLayoutEngine().layout(topic, blocks)
    output.write_bytes(render_pdf(document))
    print(f"[*] Wrote {document.page_count} pages to {output}")
    return output


def main():
    parser = argparse.ArgumentParser(description="DeepSearch research report tool")
    parser.add_argument("topic", help="Topic to research")
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Write the report as PDF to this file or directory",
    )
    parser.add_argument(
        "--no-search",
        action="store_true",
        help="Skip the best-effort web search for each stage",
    )
    parser.add_argument(
        "--fast",
        action="store_true",
        help="Disable the pacing delay between stages",
    )

    args = parser.parse_args()

    blocks, succeeded = asyncio.run(
        run_report(args.topic, search_enabled=not args.no_search, fast=args.fast)
    )
    if not succeeded:
        sys.exit(1)

    if args.output:
        write_pdf(args.topic, blocks, args.output)


if __name__ == "__main__":
    main()
