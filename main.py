import argparse
import asyncio
import json

from core.intent import AmbientContext, ProjectRef
from services.classifier import classify
from services.utils import deep_serialize


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Classify a voice transcript into a creation request.")
    parser.add_argument("text", nargs="+", help="the transcript")
    parser.add_argument("--user-id", default="local-user")
    parser.add_argument("--project-id", help="id of the project currently open")
    parser.add_argument("--project-title", default="", help="title of the project currently open")
    return parser


async def main(argv=None):
    args = build_parser().parse_args(argv)
    user_text = " ".join(args.text).strip()
    if not user_text:
        raise SystemExit("Transcript is empty")

    project = ProjectRef(id=args.project_id, title=args.project_title) if args.project_id else None
    context = AmbientContext(user_id=args.user_id, project=project)

    request = await classify(user_text, context)
    print("Determined kind:", request.kind.value)
    print(json.dumps(deep_serialize(request), indent=2))
    return request


if __name__ == "__main__":
    asyncio.run(main())
