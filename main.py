"""
Shanti Guide
메인 진입점

페르소나 가이드 응답 오케스트레이션 (검색 + 생성 + 커뮤니티 안전 필터)
"""

import argparse
import asyncio
import json
import sys

from dotenv import load_dotenv

from shanti.agents.guide_agent import get_response
from shanti.core.content_guard import ContentSafetyFilter
from shanti.domain.entities.guide import MoodType, Purpose
from shanti.infrastructure.container import Container
from shanti.monitoring.logger import AgentLogger

# 환경 변수 로드
load_dotenv()


async def run_single(prompt: str, purpose: str, mood: str | None = None) -> dict:
    """단일 요청 실행 후 {text, suggestion} 반환"""
    options = {"mood": mood} if mood else None
    return await get_response(prompt, purpose, options)


async def run_chat() -> None:
    """
    chat 인터랙티브 모드
    """
    logger = AgentLogger("chat_cli")
    logger.info("=" * 50)
    logger.info("Shanti Guide")
    logger.info("Type 'exit' to quit, 'help' for commands")
    logger.info("=" * 50)

    agent = Container.get_guide_agent()
    print("\n🪷 The guide is listening. Share what is on your heart.\n")

    try:
        while True:
            try:
                user_input = input("You: ").strip()

                if not user_input:
                    continue

                if user_input.lower() == "exit":
                    print("Goodbye!")
                    break

                if user_input.lower() == "help":
                    print_help()
                    continue

                if user_input.lower() == "status":
                    stats = {
                        "knowledge": Container.get_knowledge_loader().get_stats(),
                        "gateway": agent.gateway.get_statistics(),
                    }
                    print(f"\n📊 Status: {json.dumps(stats, ensure_ascii=False)}\n")
                    continue

                result = await agent.get_response(user_input, Purpose.CHAT)
                print(f"\n🕉️ Guide: {result.text}")
                if result.suggestion:
                    print(f"   [Suggested exercise: {result.suggestion}]")
                print()

            except EOFError:
                print("\nGoodbye!")
                break

    except KeyboardInterrupt:
        print("\n\nInterrupted. Goodbye!")


def print_help():
    """도움말 출력"""
    help_text = """
Available Commands:
  exit    - Exit the chat
  help    - Show this help message
  status  - Show knowledge and gateway stats

Example Prompts:
  - I feel anxious today and cannot sleep
  - How do I stop doubting myself at work?
  - I miss my grandmother so much
"""
    print(help_text)


def run_server(host: str, port: int) -> None:
    import uvicorn

    from shanti.api.app_factory import create_app

    uvicorn.run(create_app(), host=host, port=port)


def main():
    """메인 함수"""
    parser = argparse.ArgumentParser(
        description="Shanti Guide response orchestration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # One chat turn
  python main.py respond "I feel anxious today"

  # Journal insight with a mood label
  python main.py respond "Today was long but I finished my project" --purpose journal --mood calm

  # Interactive chat
  python main.py chat

  # Screen a community story before publishing
  python main.py screen --title "My week" --content "Small steps every day"

  # Start the HTTP API
  python main.py serve --port 8000
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    respond_parser = subparsers.add_parser("respond", help="Generate one guide response")
    respond_parser.add_argument("prompt", help="User input text")
    respond_parser.add_argument(
        "--purpose", choices=[p.value for p in Purpose], default=Purpose.CHAT.value
    )
    respond_parser.add_argument("--mood", choices=[m.value for m in MoodType])

    subparsers.add_parser("chat", help="Start interactive chat mode")

    screen_parser = subparsers.add_parser("screen", help="Screen a community story")
    screen_parser.add_argument("--title", required=True)
    screen_parser.add_argument("--content", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", type=str, default=None)
    serve_parser.add_argument("--port", type=int, default=None)

    args = parser.parse_args()

    if args.command == "respond":
        result = asyncio.run(run_single(args.prompt, args.purpose, args.mood))
        print(json.dumps(result, ensure_ascii=False, indent=2))
    elif args.command == "chat":
        asyncio.run(run_chat())
    elif args.command == "screen":
        if ContentSafetyFilter.screen_story(args.title, args.content):
            print("✅ Story can be published")
        else:
            print(ContentSafetyFilter.REVIEW_MESSAGE)
            sys.exit(1)
    elif args.command == "serve":
        config = Container.get_config()
        run_server(args.host or config.host, args.port or config.port)


if __name__ == "__main__":
    main()
