# SPDX-License-Identifier: CC0-1.0
import asyncio

from .actions import QUICK_ACTIONS, ContactDetails, format_contact_details
from .config import Settings
from .faq import Corpus, find_top_faq_matches, load_faq, score_breakdown, normalize
from .session import SessionState
from .turns import TurnController

EXIT_COMMANDS = ("/exit", "exit", "/quit", "quit")


def command_help() -> str:
    # кнопки виджета: /identify (Identify Plant) и т.д.
    actions = ", ".join(f"/{a.id} ({a.label})" for a in QUICK_ACTIONS.values())
    return f"Commands: {actions}, /explain <question>, /exit."


def explain(question: str, corpus: Corpus) -> str:
    normalized = normalize(question)
    lines = []
    for candidate in find_top_faq_matches(question, corpus):
        b = score_breakdown(normalized, candidate.record)
        lines.append(
            f"[{candidate.record.id}] {candidate.record.question} score={candidate.score} "
            f"(direct={b.direct}, keywords={b.keywords}, first_word={b.first_word}, overlap={b.overlap})"
        )
    if not lines:
        return "No FAQ record scored above zero."
    return "\n".join(lines)


async def handle_user_input(
        user_input: str,
        session: SessionState,
        controller: TurnController,
        print_fn=print,
) -> bool:
    """Обрабатывает одну строку ввода. Возвращает True, если пора завершать сессию."""
    if not user_input:
        return False

    if user_input.lower() in EXIT_COMMANDS:
        return True

    if user_input.startswith("/explain"):
        question = user_input[len("/explain"):].strip()
        print_fn(explain(question, controller.corpus) if question else "Usage: /explain <question>.")
        return False

    if user_input.startswith("/"):
        action_id = user_input[1:].split()[0].lower() if len(user_input) > 1 else ""
        if action_id not in QUICK_ACTIONS:
            print_fn("Unknown command. " + command_help())
            return False
        message = controller.quick_action(session, action_id)
    else:
        task = controller.submit_user_message(session, user_input)
        if task is None:
            return False
        print_fn(f"{session.brand} is typing...")
        message = await task

    if message is not None:
        print_fn(f"Bot: {message.text}")
        if session.contact_card_message() is message:
            print_fn(format_contact_details(ContactDetails(), session.brand))
    return False


async def _chat(controller: TurnController, input_fn, print_fn):
    session = controller.create_session()
    print_fn(f"Bot: {session.transcript[0].text}")
    print_fn(command_help())

    try:
        while True:
            try:
                user_input = input_fn("You: ").strip()
            except (EOFError, KeyboardInterrupt):
                print_fn("\nBot: Have a nice day!")
                break

            if await handle_user_input(user_input, session, controller, print_fn):
                print_fn("Bot: Have a nice day!")
                break
    finally:
        # итоговая сводка пишется при закрытии
        controller.close_session(session)
    return session


def run_bot(input_fn=input, print_fn=print, settings: Settings | None = None, **controller_kwargs):
    settings = settings or Settings.load()
    controller = TurnController(
        load_faq(settings.faq_path),
        brand=settings.brand_name,
        typing_delay=(settings.typing_delay_min, settings.typing_delay_max),
        logs_dir=settings.logs_dir,
        **controller_kwargs,
    )
    return asyncio.run(_chat(controller, input_fn, print_fn))


def main():
    run_bot()


if __name__ == "__main__":
    main()
