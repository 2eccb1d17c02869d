import unittest
from dataclasses import replace

from ludo_rules.dice import FixedDice
from ludo_rules.game import initial_state, resolve_move, roll_dice, select_token
from ludo_rules.types import Phase, Player, Token, TokenState

# RED step 20 and GREEN step 7 are both cell (11, 6), an ordinary square.
# RED step 21 and GREEN step 8 are both (12, 6), GREEN's globe square.
RED = 0
GREEN = 4
YELLOW = 8


class TestCapturesAndWins(unittest.TestCase):
    def setUp(self):
        self.state = initial_state()

    def force_position(self, state, token_id, step):
        tokens = list(state.tokens)
        tok = tokens[token_id]
        state_kind = TokenState.HOME if step == 56 else TokenState.ACTIVE
        tokens[token_id] = Token(tok.id, tok.owner, step, state_kind)
        return replace(state, tokens=tuple(tokens))

    def green_to_move(self, state):
        return replace(state, current_player=Player.GREEN)

    def test_capture(self):
        state = self.force_position(self.state, RED, 20)
        state = self.force_position(state, GREEN, 4)
        rolled = roll_dice(self.green_to_move(state), FixedDice([3]))
        result = resolve_move(rolled, GREEN)
        self.assertIsNotNone(result)
        self.assertEqual(result.events.captured_token_ids, (RED,))
        victim = result.state.token(RED)
        self.assertEqual(victim.step, -1)
        self.assertEqual(victim.state, TokenState.BASE)
        self.assertEqual(result.state.token(GREEN).step, 7)

    def test_no_capture_on_safe_square(self):
        state = self.force_position(self.state, RED, 21)
        state = self.force_position(state, GREEN, 5)
        rolled = roll_dice(self.green_to_move(state), FixedDice([3]))
        moved = select_token(rolled, GREEN)
        self.assertEqual(moved.token(RED).step, 21)
        self.assertEqual(moved.token(RED).state, TokenState.ACTIVE)
        self.assertEqual(moved.tokens_at(12, 6), (moved.token(RED), moved.token(GREEN)))

    def test_entering_on_occupied_entry_square_is_safe(self):
        # RED step 13 is GREEN's entry cell (8, 1)
        state = self.force_position(self.state, RED, 13)
        rolled = roll_dice(self.green_to_move(state), FixedDice([6]))
        moved = select_token(rolled, GREEN)
        self.assertEqual(moved.token(GREEN).step, 0)
        self.assertEqual(moved.token(RED).step, 13)

    def test_all_occupants_are_captured(self):
        state = self.force_position(self.state, RED, 20)
        state = self.force_position(state, RED + 1, 20)
        # YELLOW step 46 is the same cell seen from the opposite corner
        state = self.force_position(state, YELLOW, 46)
        state = self.force_position(state, GREEN, 1)
        self.assertEqual(len(state.tokens_at(11, 6)), 3)

        rolled = roll_dice(self.green_to_move(state), FixedDice([6]))
        result = resolve_move(rolled, GREEN)
        self.assertEqual(sorted(result.events.captured_token_ids), [RED, RED + 1, YELLOW])
        for victim in (RED, RED + 1, YELLOW):
            self.assertTrue(result.state.token(victim).is_in_base())
        self.assertEqual(result.state.tokens_at(11, 6), (result.state.token(GREEN),))

    def test_own_tokens_stack_without_capture(self):
        state = self.force_position(self.state, GREEN, 7)
        state = self.force_position(state, GREEN + 1, 4)
        rolled = roll_dice(self.green_to_move(state), FixedDice([3]))
        result = resolve_move(rolled, GREEN + 1)
        self.assertEqual(result.events.captured_token_ids, ())
        self.assertEqual(result.state.token(GREEN).step, 7)
        self.assertEqual(result.state.token(GREEN + 1).step, 7)

    def test_capture_does_not_grant_bonus_roll(self):
        state = self.force_position(self.state, RED, 20)
        state = self.force_position(state, GREEN, 4)
        rolled = roll_dice(self.green_to_move(state), FixedDice([3]))
        result = resolve_move(rolled, GREEN)
        self.assertTrue(result.events.captured_token_ids)
        self.assertFalse(result.events.bonus_roll)
        self.assertEqual(result.state.current_player, Player.YELLOW)

    def test_win(self):
        state = self.state
        for token_id in (1, 2, 3):
            state = self.force_position(state, token_id, 56)
        state = self.force_position(state, 0, 54)
        rolled = roll_dice(state, FixedDice([2]))
        result = resolve_move(rolled, 0)
        final = result.state
        self.assertTrue(result.events.won)
        self.assertEqual(final.winner, Player.RED)
        self.assertEqual(final.phase, Phase.GAME_OVER)
        self.assertFalse(final.roll_allowed)
        self.assertEqual(final.current_player, Player.RED)
        self.assertEqual(final.status_message, "RED wins!")
        self.assertTrue(all(t.completed for t in final.tokens_of(Player.RED)))

    def test_win_on_six_is_terminal(self):
        state = self.state
        for token_id in (1, 2, 3):
            state = self.force_position(state, token_id, 56)
        state = self.force_position(state, 0, 50)
        result = resolve_move(roll_dice(state, FixedDice([6])), 0)
        self.assertTrue(result.events.won)
        self.assertFalse(result.events.bonus_roll)
        self.assertEqual(result.state.phase, Phase.GAME_OVER)

    def test_game_over_rejects_commands(self):
        state = self.state
        for token_id in (1, 2, 3):
            state = self.force_position(state, token_id, 56)
        state = self.force_position(state, 0, 54)
        final = select_token(roll_dice(state, FixedDice([2])), 0)

        dice = FixedDice([6])
        self.assertIs(roll_dice(final, dice), final)
        self.assertEqual(dice.remaining, 1)
        for token_id in range(16):
            self.assertIs(select_token(final, token_id), final)


if __name__ == "__main__":
    unittest.main()
