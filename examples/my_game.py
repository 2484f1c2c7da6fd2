"""
my_game.py — A custom game for the arena engine
================================================

Guess the number: the engine picks a secret, every round each bot
guesses and is told "higher" or "lower". The first exact guess wins.

Implement the 5 GameAdapter methods, plus parse_setting for any setup
lines your game accepts.
"""

import json
import logging
import random

from arena_engine import AbstractPlayer, AbstractProcessor, AbstractState, GameAdapter

logger = logging.getLogger("my_game")


class GuessState(AbstractState):
    def __init__(self, players, guesses=None, round_number=0, previous_state=None):
        super().__init__(players, round_number, previous_state)
        self.guesses = dict(guesses or {})


class GuessProcessor(AbstractProcessor):
    def __init__(self, players, secret, max_rounds):
        super().__init__(players)
        self.secret = secret
        self.max_rounds = max_rounds
        self.winner = None

    def play_round(self, round_number, state):
        guesses = {}
        for player in self.players:
            reply = player.request_move("guess")
            try:
                guess = int(reply)
            except ValueError:
                player.send_warning(f"'{reply}' is not a number")
                continue
            guesses[player.id] = guess
            if guess == self.secret and self.winner is None:
                self.winner = player
            hint = "higher" if guess < self.secret else "lower"
            player.send_update("hint", "correct" if guess == self.secret else hint)
        return GuessState(self.players, guesses, round_number, state)

    def has_game_ended(self, state):
        return self.winner is not None or state.round_number >= self.max_rounds

    def get_winner(self):
        return self.winner

    def get_score(self):
        return self.secret


class MyGame(GameAdapter):
    name = "guess_the_number"

    def __init__(self, upper=100):
        self.upper = upper

    def parse_setting(self, command, args, configuration):
        if command == "max_rounds" and args:
            try:
                configuration.put("max_rounds", int(args[0]))
            except ValueError:
                logger.warning(f"Ignoring bad setting: max_rounds {args[0]!r}")

    def create_player(self, player_id):
        return AbstractPlayer(player_id)

    def create_processor(self, players, configuration):
        secret = random.randint(1, self.upper)
        return GuessProcessor(players, secret, configuration.get_int("max_rounds", 10))

    def send_game_settings(self, player, configuration):
        player.send_setting("your_botid", player.id)
        player.send_setting("range", f"1-{self.upper}")

    def get_initial_state(self, players, configuration):
        return GuessState(players)

    def get_played_game(self, initial_state):
        return json.dumps([
            {"round": state.round_number, "guesses": state.guesses}
            for state in initial_state.iter_states()
        ])
