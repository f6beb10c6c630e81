"""
Terminal chat client.

    python -m mindfulchat.client                  # offline demo replies
    python -m mindfulchat.client --api-url URL --token TOKEN --conversation-id 1
"""
import argparse
import asyncio
from mindfulchat.client.chat_view import ChatView, Notification
from mindfulchat.client.transports import ApiTransport, DemoTransport
from mindfulchat.core.logging import configure_logging


def _print_notification(notification: Notification) -> None:
    print(f"  [{notification.title}] {notification.description}")


async def run(view: ChatView) -> None:
    print(f"MindfulChat: {view.messages[0].content}\n")
    loop = asyncio.get_running_loop()
    while True:
        text = await loop.run_in_executor(None, input, "you> ")
        if text.strip() in ("/quit", "/exit"):
            return
        view.set_draft(text)
        reply = await view.send()
        if reply:
            print(f"\nMindfulChat: {reply.content}\n")
        if view.crisis_modal_open:
            print("  Crisis Support: if you're in immediate danger, please contact emergency services.")
            for resource in view.crisis_resources:
                print(f"    {resource.label} ({resource.href})")
            view.close_crisis_modal()


def main() -> None:
    parser = argparse.ArgumentParser(description="Chat with MindfulChat from the terminal")
    parser.add_argument("--api-url", help="Backend base URL; omit for offline demo mode")
    parser.add_argument("--token", default="", help="Bearer token from the identity provider")
    parser.add_argument("--conversation-id", type=int, default=1)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    configure_logging(args.log_level)
    if args.api_url:
        transport = ApiTransport(args.api_url, args.token)
    else:
        transport = DemoTransport()
    view = ChatView(transport, conversation_id=args.conversation_id, on_notify=_print_notification)
    try:
        asyncio.run(run(view))
    except (KeyboardInterrupt, EOFError):
        pass


if __name__ == "__main__":
    main()
