import json
import random
import sys
from typing import TextIO

import constraintmap
import corpus
import gui_util
import layout

SETTINGS_FILE = "session_settings.json"

def default_corpus_settings() -> dict:
    return {
        "filename": "sample.txt",
        "precision": 100,
        "report_precision": 50,
    }

class Session:
    """
    Contains keyanneal settings and the output stream--everything needed
    for commands to be run.
    """

    def __init__(self, out: TextIO = None, settings_file: str = SETTINGS_FILE,
                 color: bool = None) -> None:
        self.out = sys.stdout if out is None else out
        if color is None:
            color = hasattr(self.out, "isatty") and self.out.isatty()
        self.color = color
        self.settings_file = settings_file
        self.startup_messages = []

        try:
            with open(settings_file) as file:
                settings = json.load(file)
            some_default = False
            try:
                self.analysis_target = layout.get_layout(
                    settings["analysis_target"])
            except (FileNotFoundError, KeyError, ValueError):
                self.analysis_target = layout.get_layout("qwerty")
                some_default = True
            try:
                self.constraintmap_ = constraintmap.get_constraintmap(
                    settings["constraintmap"])
            except (FileNotFoundError, KeyError):
                self.constraintmap_ = constraintmap.get_constraintmap(
                    "letters")
                some_default = True
            self.corpus_settings = default_corpus_settings()
            try:
                self.corpus_settings.update(settings["corpus_settings"])
            except (KeyError, TypeError, ValueError):
                some_default = True
            try:
                self.iterations = int(settings["iterations"])
            except (KeyError, TypeError, ValueError):
                self.iterations = 10000
                some_default = True
            try:
                self.seed = settings["seed"]
            except KeyError:
                self.seed = None
                some_default = True
            self.startup_messages.append(
                ("Loaded user settings", gui_util.green))
            if some_default:
                self.startup_messages.append((
                    "Set some missing/bad settings to default", gui_util.blue))
        except (FileNotFoundError, json.decoder.JSONDecodeError, TypeError):
            self.analysis_target = layout.get_layout("qwerty")
            self.constraintmap_ = constraintmap.get_constraintmap("letters")
            self.corpus_settings = default_corpus_settings()
            self.iterations = 10000
            self.seed = None
            self.startup_messages.append(
                ("Using default user settings", gui_util.blue))

    @property
    def target_corpus(self) -> corpus.Corpus:
        """Raises FileNotFoundError if the corpus file is missing."""
        return corpus.get_corpus(self.corpus_settings["filename"],
                                 self.corpus_settings["precision"])

    @property
    def report_precision(self) -> int | None:
        """None (every trigram) when set to 0 or less."""
        precision = self.corpus_settings["report_precision"]
        return precision if precision > 0 else None

    def rng(self) -> random.Random:
        """A fresh generator for one run. Seeded runs repeat exactly."""
        return random.Random(self.seed)

    def save_settings(self):
        with open(self.settings_file, "w") as file:
            json.dump(
                {   "analysis_target": self.analysis_target.name,
                    "constraintmap": self.constraintmap_.name,
                    "corpus_settings": self.corpus_settings,
                    "iterations": self.iterations,
                    "seed": self.seed,
                }, file, indent=4)

    def say(self, msg: str, color: int = 0):
        if not self.color:
            color = 0
        print(gui_util.colored(msg, color), file=self.out)

    def parse_command(self, tokens: list[str]):
        """Yields (command_name, args). This is a generator because a
        leading number causes the command to be run multiple times.
        Returns immediately if there is no command."""
        tokens = list(tokens)
        if not tokens:
            return
        command = tokens.pop(0).lower()
        try:
            num_repetitions = int(command)
            command = tokens.pop(0).lower()
        except ValueError:
            num_repetitions = 1
        except IndexError:
            return
        for _ in range(num_repetitions):
            yield command, tokens.copy()
