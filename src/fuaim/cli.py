"""CLI entrypoint for fuaim: subcommand dispatcher."""

import argparse
import logging
import sys
import threading

from fuaim.types import REGIONS


def _add_shared_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments shared between all subcommands."""
    parser.add_argument("-v", "--verbose", action="store_true", default=False,
                        help="Debug logging, including HTTP client chatter")


def _add_api_args(parser: argparse.ArgumentParser) -> None:
    from fuaim.api import API_URL

    parser.add_argument("--api-url", default=API_URL,
                        help=f"Backend base URL (default: {API_URL}, env FUAIM_API_URL)")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments with subcommands."""
    parser = argparse.ArgumentParser(
        prog="fuaim",
        description="Irish vocabulary clusters and dialect pronunciation playback",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    url_parser = subparsers.add_parser(
        "url",
        help="Print pronunciation URLs for a word",
    )
    url_parser.add_argument("word", help="Irish word")
    url_parser.add_argument("--region", default=None,
                            help="Dialect region (default: all of Connacht, Munster, Ulster)")
    _add_shared_args(url_parser)

    play_parser = subparsers.add_parser(
        "play",
        help="Play the pronunciation of a word",
        description="Fetch and play a word's recording for one dialect region",
    )
    play_parser.add_argument("word", help="Irish word")
    play_parser.add_argument("--region", default="Connacht",
                             help="Dialect region (default: Connacht)")
    _add_shared_args(play_parser)

    words_parser = subparsers.add_parser(
        "words",
        help="List all words from the backend",
    )
    _add_shared_args(words_parser)
    _add_api_args(words_parser)

    cluster_parser = subparsers.add_parser(
        "cluster",
        help="List the words of one cluster",
    )
    cluster_parser.add_argument("cluster_id", help="Cluster identifier")
    _add_shared_args(cluster_parser)
    _add_api_args(cluster_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    return args


def _run_url(args: argparse.Namespace) -> None:
    from fuaim.regions import resolve_audio_url

    regions = [args.region] if args.region else list(REGIONS)
    for region in regions:
        url = resolve_audio_url(args.word, region)
        if not url:
            print(f"Error: unknown region {region!r} (expected one of {', '.join(REGIONS)})",
                  file=sys.stderr)
            sys.exit(1)
        print(f"{region}: {url}")


def _run_play(args: argparse.Namespace) -> None:
    """Play one word and block until the session ends or fails."""
    from fuaim.notify import LoggingNotifier
    from fuaim.playback import PlaybackController
    from fuaim.types import PlaybackState

    notifier = LoggingNotifier()
    controller = PlaybackController(notifier)
    done = threading.Event()

    def on_state(state: PlaybackState) -> None:
        if state is PlaybackState.PLAYING:
            print(f"Playing {args.word} ({args.region})")
        elif state is PlaybackState.IDLE:
            done.set()

    controller.add_listener(on_state)
    controller.play(args.word, args.region)
    done.wait()

    # Wait for the worker so its temp directory is removed before exit
    session = controller.session
    if session is not None and session.player is not None:
        session.player.join()

    if notifier.messages:
        print(f"Error: {notifier.messages[-1]}", file=sys.stderr)
        sys.exit(1)


def _run_words(args: argparse.Namespace) -> None:
    from fuaim.api import ApiClient
    from fuaim.stores import WordStore

    store = WordStore(ApiClient(args.api_url))
    store.load_words()
    if store.error_message:
        print(f"Error: {store.error_message}", file=sys.stderr)
        sys.exit(1)
    for word in store.words:
        print(f"{word.id}\t{word.irish}\t{word.english or ''}")


def _run_cluster(args: argparse.Namespace) -> None:
    from fuaim.api import ApiClient
    from fuaim.stores import ClusterStore

    store = ClusterStore(ApiClient(args.api_url))
    store.load_clusters()
    if store.error_message:
        print(f"Error: {store.error_message}", file=sys.stderr)
        sys.exit(1)

    words = store.words_in_cluster(args.cluster_id)
    if not words:
        print(f"No words in cluster {args.cluster_id}")
        return
    for word in words:
        print(f"{word.id}\t{word.irish}\t{word.english}")


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint."""
    args = parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(name)s %(levelname)s: %(message)s")

    if not args.verbose:
        logging.getLogger("urllib3").setLevel(logging.WARNING)

    if args.command == "url":
        _run_url(args)
    elif args.command == "play":
        _run_play(args)
    elif args.command == "words":
        _run_words(args)
    elif args.command == "cluster":
        _run_cluster(args)


if __name__ == "__main__":
    main()
