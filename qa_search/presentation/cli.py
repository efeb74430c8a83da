
import argparse
import logging
import sys
from typing import Optional

from qa_search.config.settings import Settings, settings
from qa_search.container import configure_container, container
from qa_search.core.models.criteria import SearchCriteria, SortOption
from qa_search.core.models.question import Question
from qa_search.core.services.search_service import SearchService

logger = logging.getLogger(__name__)


def print_results(
    results: list[Question], service: SearchService, query: Optional[str] = None
) -> None:
    """Print one line per question, with relevance when a query is given."""
    if not results:
        print("No results.")
        return

    for q in results:
        if query is not None:
            score = service.relevance_score(q, query)
            print(f"{q.id:>6}  {score:.3f}  {q.title}")
        else:
            print(f"{q.id:>6}  {q.title}")


def build_parser(defaults: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qa-search")
    parser.add_argument("--source", choices=["sqlite", "json"], default=None)
    parser.add_argument("--db", default=None, help="SQLite database path")
    parser.add_argument("--corpus", default=None, help="JSON corpus path")
    sub = parser.add_subparsers(dest="command", required=True)

    for name in ("search", "exact", "fuzzy"):
        p = sub.add_parser(name)
        p.add_argument("query", nargs="?", default="")
        p.add_argument("--limit", type=int, default=defaults.default_limit)
        p.add_argument("--offset", type=int, default=0)
        p.add_argument("--explain", action="store_true")

    p = sub.add_parser("criteria")
    p.add_argument("--text", default=None)
    p.add_argument("--subject", type=int, default=None)
    p.add_argument("--user", type=int, default=None)
    p.add_argument("--tag", action="append", default=[])
    p.add_argument(
        "--sort",
        choices=[o.value for o in SortOption],
        default=SortOption.NEWEST.value,
    )
    p.add_argument("--unanswered", action="store_true")
    p.add_argument("--solved", action="store_true")
    p.add_argument("--limit", type=int, default=defaults.default_limit)
    p.add_argument("--offset", type=int, default=0)

    p = sub.add_parser("related")
    p.add_argument("--id", type=int, required=True)
    p.add_argument("--title", required=True)
    p.add_argument("--content", default="")
    p.add_argument("--subject", type=int, default=None)
    p.add_argument("--tag", action="append", default=[])
    p.add_argument("--limit", type=int, default=5)

    return parser


def run(args: argparse.Namespace, service: SearchService) -> None:
    """Dispatch a parsed command to the search service."""
    if args.command in ("search", "exact", "fuzzy"):
        operation = {
            "search": service.search,
            "exact": service.search_exact,
            "fuzzy": service.search_fuzzy,
        }[args.command]
        results = operation(args.query, args.limit, args.offset)
        print_results(results, service, args.query if args.explain else None)
    elif args.command == "criteria":
        criteria = SearchCriteria(
            search_text=args.text,
            subject_id=args.subject,
            user_id=args.user,
            sort_option=SortOption(args.sort),
            only_unanswered=args.unanswered,
            only_solved=args.solved,
            limit=args.limit,
            offset=args.offset,
        )
        for tag in args.tag:
            criteria.add_tag(tag)
        print_results(service.search_with_criteria(criteria), service)
    elif args.command == "related":
        source = Question(
            id=args.id,
            title=args.title,
            content=args.content,
            tags=args.tag,
            subject_id=args.subject,
        )
        print_results(service.get_related_questions(source, args.limit), service)


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point."""
    args = build_parser(settings).parse_args(argv)

    overrides = {}
    if args.source:
        overrides["candidate_source"] = args.source
    if args.db:
        overrides["sqlite_path"] = args.db
    if args.corpus:
        overrides["corpus_path"] = args.corpus
    config = settings.model_copy(update=overrides) if overrides else settings

    logging.basicConfig(level=config.log_level.upper(), format="%(message)s")

    configure_container(config)
    try:
        service = container.resolve(SearchService)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    run(args, service)


if __name__ == "__main__":
    main()
