import os

_GRADIO_BASE = os.path.join(os.getcwd(), "gradio_runtime")
os.environ.setdefault("GRADIO_TEMP_DIR", _GRADIO_BASE)
os.environ.setdefault("GRADIO_CACHE_DIR", os.path.join(_GRADIO_BASE, "cache"))

import base64
import io
import time
from typing import List, Optional, Tuple

import gradio as gr
from loguru import logger

from ludo_gr.board_viz import draw_board
from ludo_lounge.game import Game
from ludo_lounge.persistence import JsonStateStore

# Pause before a dead roll hands the turn on, so the reason can be read
AUTO_PASS_DELAY = 0.35


def _img_to_data_uri(pil_img) -> str:
    """Return an inline <img> for the PIL image to avoid Gradio temp files."""
    buf = io.BytesIO()
    pil_img.save(buf, format="PNG")
    b64 = base64.b64encode(buf.getvalue()).decode("utf-8")
    return f"<img src='data:image/png;base64,{b64}' style='width:100%;max-width:640px;' />"


def move_choices(game: Game) -> List[Tuple[str, str]]:
    """(label, token id) pairs for the pending roll's legal moves."""
    choices = []
    for mv in game.legal.moves:
        label = f"{mv.token_id} -> step {mv.next_progress}"
        if mv.is_capture:
            label += f" (capture {', '.join(mv.captures)})"
        choices.append((label, mv.token_id))
    return choices


def scoreboard(game: Game) -> str:
    rows = ["| Player | Home | Finished |", "|---|---|---|"]
    for summary in game.summaries():
        marker = " ◀" if summary.color == game.state.current_player else ""
        rows.append(f"| {summary.label}{marker} | {summary.at_home} | {summary.finished} |")
    return "\n".join(rows)


def render(game: Game):
    state = game.state
    dice = "-" if state.dice is None else str(state.dice)
    status = f"**{state.current().label}** to play · die: **{dice}**\n\n{state.message}"
    choices = move_choices(game)
    return (
        game,
        _img_to_data_uri(draw_board(state, highlight=game.legal.token_ids)),
        status,
        scoreboard(game),
        gr.update(choices=choices, value=choices[0][1] if choices else None),
        gr.update(interactive=game.awaiting_roll),
        gr.update(interactive=bool(choices)),
    )


def _ensure(game: Optional[Game], store: JsonStateStore) -> Game:
    return game if game is not None else Game(store=store)


def launch_app(save_path: Optional[str] = None):
    store = JsonStateStore(save_path)

    with gr.Blocks(title="Ludo Lounge") as demo:
        gr.Markdown("# Ludo Lounge\nPass-and-play Ludo. A 6 enters a piece and keeps your turn.")
        game_state = gr.State()
        with gr.Row():
            with gr.Column(scale=3):
                board = gr.HTML(label="Board")
            with gr.Column(scale=2):
                status = gr.Markdown()
                with gr.Row():
                    roll_btn = gr.Button("Roll", variant="primary")
                    reset_btn = gr.Button("Reset")
                moves = gr.Radio(label="Choose a piece to move", choices=[])
                move_btn = gr.Button("Move")
                score = gr.Markdown()

        outputs = [game_state, board, status, score, moves, roll_btn, move_btn]

        def _load(game):
            return render(_ensure(game, store))

        def _roll(game):
            game = _ensure(game, store)
            game.roll()
            return render(game)

        def _auto_pass(game):
            game = _ensure(game, store)
            if game.state.dice is not None and not game.legal and not game.is_over:
                time.sleep(AUTO_PASS_DELAY)
                game.pass_turn()
            return render(game)

        def _move(game, token_id):
            game = _ensure(game, store)
            if token_id and not game.move(token_id):
                logger.warning(f"UI move for {token_id} was rejected")
            return render(game)

        def _reset(game):
            game = _ensure(game, store)
            game.reset()
            return render(game)

        demo.load(_load, [game_state], outputs).then(
            _auto_pass, [game_state], outputs
        )
        roll_btn.click(_roll, [game_state], outputs).then(
            _auto_pass, [game_state], outputs
        )
        move_btn.click(_move, [game_state, moves], outputs)
        reset_btn.click(_reset, [game_state], outputs)

    return demo


if __name__ == "__main__":
    launch_app().launch()
