from delve.engine.inventory import InventoryItem
from delve.engine.turns import Engine, PlayerAction, run_loop
from delve.entities import ItemKind
from delve.input import KeyCode, KeyEvent, PointerEvent, ScriptedInput


class FakeDisplay:
    def __init__(self):
        self.toggles = 0

    def toggle_fullscreen(self):
        self.toggles += 1


def key(code, text="", alt=False):
    return KeyEvent(code, text=text, alt=alt)


def test_arrow_moves_and_takes_turn(make_game):
    engine = Engine(make_game())
    assert engine.step(key(KeyCode.RIGHT)) is PlayerAction.TOOK_TURN
    assert engine.game.player.pos == (2, 1)
    assert engine.turn == 1


def test_bumping_a_wall_still_takes_turn(make_game):
    engine = Engine(make_game())
    assert engine.step(key(KeyCode.UP)) is PlayerAction.TOOK_TURN
    assert engine.game.player.pos == (1, 1)


def test_no_input_and_unknown_keys_cost_nothing(make_game):
    engine = Engine(make_game())
    assert engine.step(None) is PlayerAction.DIDNT_TAKE_TURN
    assert engine.step(key(KeyCode.TEXT, "x")) is PlayerAction.DIDNT_TAKE_TURN
    assert engine.turn == 0


def test_escape_exits(make_game):
    engine = Engine(make_game())
    assert engine.step(key(KeyCode.ESCAPE)) is PlayerAction.EXIT


def test_alt_enter_toggles_fullscreen(make_game):
    display = FakeDisplay()
    engine = Engine(make_game(), display=display)
    assert engine.step(key(KeyCode.ENTER, alt=True)) is PlayerAction.DIDNT_TAKE_TURN
    assert display.toggles == 1
    assert engine.step(key(KeyCode.ENTER)) is PlayerAction.DIDNT_TAKE_TURN
    assert display.toggles == 1


def test_pointer_updates_mouse_only(make_game):
    engine = Engine(make_game())
    assert engine.step(PointerEvent(4, 2)) is PlayerAction.DIDNT_TAKE_TURN
    assert engine.mouse == (4, 2)
    assert engine.game.player.pos == (1, 1)


def test_pick_up_does_not_cost_a_turn(make_game, make_potion, make_orc):
    game = make_game(player_at=(1, 2))
    game.entities.add(make_potion(1, 2))
    orc = make_orc(5, 2)
    game.entities.add(orc)
    engine = Engine(game)
    assert engine.step(key(KeyCode.TEXT, "g")) is PlayerAction.DIDNT_TAKE_TURN
    assert len(game.inventory) == 1
    assert orc.pos == (5, 2)


def test_monsters_act_in_index_order(make_game, make_orc):
    game = make_game(player_at=(2, 1))
    game.entities.add(make_orc(1, 1, "Orc A"))
    game.entities.add(make_orc(3, 1, "Orc B"))
    engine = Engine(game)
    engine.step(key(KeyCode.UP))
    assert game.messages.texts() == [
        "Orc A attacks me for 1 hit points.",
        "Orc B attacks me for 1 hit points.",
    ]
    assert game.player.fighter.hp == 28


def test_monsters_idle_after_a_free_action(make_game, make_orc):
    game = make_game(player_at=(2, 1))
    game.entities.add(make_orc(1, 1))
    engine = Engine(game)
    engine.step(PointerEvent(0, 0))
    assert game.player.fighter.hp == 30


def test_dead_player_cannot_act(make_game, make_orc):
    game = make_game(player_at=(2, 1))
    game.entities.add(make_orc(1, 1))
    game.player.is_alive = False
    engine = Engine(game)
    assert engine.step(key(KeyCode.RIGHT)) is PlayerAction.DIDNT_TAKE_TURN
    assert game.player.pos == (2, 1)
    assert len(game.messages) == 0
    assert engine.step(key(KeyCode.ESCAPE)) is PlayerAction.EXIT


def test_inventory_menu_use_item(make_game):
    game = make_game()
    game.inventory.add(InventoryItem(name="Potion of Healing", kind=ItemKind.HEAL))
    game.player.fighter.hp = 20
    engine = Engine(game)
    assert engine.step(key(KeyCode.TEXT, "i")) is PlayerAction.TOOK_TURN
    assert engine.inventory_open
    assert engine.step(key(KeyCode.TEXT, "a")) is PlayerAction.TOOK_TURN
    assert not engine.inventory_open
    assert game.player.fighter.hp == 24
    assert len(game.inventory) == 0


def test_inventory_menu_cancel(make_game):
    game = make_game()
    game.inventory.add(InventoryItem(name="Potion of Healing", kind=ItemKind.HEAL))
    engine = Engine(game)
    engine.step(key(KeyCode.TEXT, "i"))
    assert engine.step(key(KeyCode.ESCAPE)) is PlayerAction.DIDNT_TAKE_TURN
    assert not engine.inventory_open
    engine.step(key(KeyCode.TEXT, "i"))
    assert engine.step(key(KeyCode.TEXT, "z")) is PlayerAction.DIDNT_TAKE_TURN
    assert not engine.inventory_open
    assert engine.step(key(KeyCode.RIGHT)) is PlayerAction.TOOK_TURN
    assert game.player.pos == (2, 1)


def test_fov_recomputed_only_after_moving(make_game):
    engine = Engine(make_game())
    assert engine.refresh_visibility()
    assert not engine.refresh_visibility()
    engine.step(key(KeyCode.RIGHT))
    assert engine.refresh_visibility()
    assert engine.game.map.tile(0, 0).explored


def test_run_loop_until_input_runs_out(make_game):
    engine = Engine(make_game())
    frames = []
    steps = run_loop(engine, ScriptedInput.from_keys(["right", "right"]), render=frames.append)
    assert steps == 2
    assert len(frames) == 3
    assert engine.game.player.pos == (3, 1)


def test_run_loop_stops_on_exit_and_max_steps(make_game):
    engine = Engine(make_game())
    assert run_loop(engine, ScriptedInput.from_keys(["right", "esc", "right"])) == 2
    assert engine.game.player.pos == (2, 1)

    engine = Engine(make_game())
    assert run_loop(engine, ScriptedInput.from_keys(["right", "right"]), max_steps=1) == 1
    assert engine.game.player.pos == (2, 1)


def test_opening_inventory_lets_monsters_act(make_game, make_orc):
    game = make_game(player_at=(1, 2))
    orc = make_orc(5, 2)
    game.entities.add(orc)
    engine = Engine(game)
    assert engine.step(key(KeyCode.TEXT, "i")) is PlayerAction.TOOK_TURN
    assert engine.inventory_open
    assert orc.pos == (4, 2)
    assert engine.turn == 1
