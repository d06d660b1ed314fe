import argparse
import asyncio
import sys

from colorama import Fore, Style, init as colorama_init

from companion.client import CompanionClient
from companion.speech import crisis_notice


EMOTION_COLORS = {
    "anxious": Fore.YELLOW,
    "stressed": Fore.YELLOW,
    "sad": Fore.BLUE,
    "lonely": Fore.BLUE,
    "angry": Fore.RED,
    "happy": Fore.GREEN,
    "hopeful": Fore.GREEN,
    "calm": Fore.CYAN,
}


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Chat with the companion backend from a terminal.")
    parser.add_argument("--url", default="http://localhost:8000")
    parser.add_argument("--locale", default="en")
    parser.add_argument("--country", default=None, help="Country used to pick helplines")
    return parser.parse_args(argv)


async def run_loop(args: argparse.Namespace) -> None:
    colorama_init(autoreset=True)
    print("Type a message and press Enter. Ctrl+D to quit.")
    async with CompanionClient(args.url, locale=args.locale) as client:
        while True:
            line = await asyncio.to_thread(sys.stdin.readline)
            if not line:
                break
            text = line.strip()
            if not text:
                continue
            shown = 0
            async for partial in client.stream(text):
                sys.stdout.write(partial[shown:])
                sys.stdout.flush()
                shown = len(partial)
            print()
            reply = client.last_reply
            color = EMOTION_COLORS.get(reply.emotion, Fore.WHITE)
            print(color + f"[{reply.emotion}]" + (" (offline reply)" if reply.fallback else ""))
            if reply.crisis:
                print(Fore.RED + Style.BRIGHT + crisis_notice(args.country))


if __name__ == "__main__":
    try:
        asyncio.run(run_loop(parse_args()))
    except KeyboardInterrupt:
        print("\nStopping.")
