# `Command`s bundle names/aliases, help-strings, and functionality.
# Also defines all the individual commands in keyanneal.
# Also contains backend functions which are useful for the commands.

import enum
import os
import time
from typing import Callable, Iterable

import analysis
import anneal
from board import Row, row_display_names
import constraintmap
import corpus
import effort
from fingermap import Finger, finger_display_names
import graphs
import gui_util
import layout
from session import Session

class CommandType(enum.Enum):
    GENERAL = enum.auto()
    DATA = enum.auto()
    ANALYSIS = enum.auto()
    EDITING = enum.auto()

class Command:

    def __init__(self, type: CommandType, help: tuple[str], names: tuple[str],
                 fn: Callable[[list[str], Session], str | None]):
        """
        `names` is a list of aliases that the user can use to activate the
        command. The first of these will be use to alphabetize commands.

        The first string of `help` will be used as a brief summary when the
        `help` command is used with no args. The rest will be joined with
        newlines.

        `fn` is the actual function to be run, with parameters being
        `args: list[str]` and `session`. It is usually void.
        """
        self.names = names
        self.type = type
        self.help = help
        self.fn = fn

commands = list()
by_name = dict()

def register_command(cmd: Command):
    commands.append(cmd)
    for name in cmd.names:
        by_name[name] = cmd

def run_command(name: str, args: list[str], s: Session):
    cmd = by_name.get(name, None)
    if cmd is None:
        s.say("Unrecognized command", gui_util.red)
        return
    try:
        return cmd.fn(args, s)
    except FileNotFoundError as e:
        s.say(f"{e.filename or e} was not found.", gui_util.red)
    except LookupError as e:
        s.say(f"Missing key: {e.args[0] if e.args else e}", gui_util.red)
    except ValueError as e:
        s.say(str(e), gui_util.red)

# Actual commands

def cmd_layout(args: list[str], s: Session):
    layout_name = " ".join(args)
    if layout_name: # set layout
        try:
            s.analysis_target = layout.get_layout(layout_name)
        except FileNotFoundError:
            s.say(f"/layouts/{layout_name} was not found.", gui_util.red)
            return
        s.say(f"Set {s.analysis_target.name} as the analysis target.",
            gui_util.green)
        s.save_settings()
    s.say(f"\n{s.analysis_target}\n{s.analysis_target.diagram()}")

register_command(Command(
    CommandType.GENERAL,
    (
        "layout|use [layout name]: Set analysis target (for further commands)",
        "If no argument given, shows the current target."
    ),
    ("layout", "use"),
    cmd_layout
))

def cmd_list(args: list[str], s: Session):
    for label, names in (
            ("Layouts", layout.list_layouts()),
            ("Corpora", corpus.list_corpora()),
            ("Constraintmaps", constraintmap.list_constraintmaps())):
        s.say(gui_util.heading(f"{label} ({len(names)})"))
        s.say("\n".join(names) if names else "(none)")

register_command(Command(
    CommandType.GENERAL,
    ("list|ls: List layouts, corpora and constraintmaps",),
    ("list", "ls"),
    cmd_list
))

def cmd_seed(args: list[str], s: Session):
    if not args:
        s.say(f"Seed: {s.seed if s.seed is not None else 'none (random)'}")
        return
    if args[0].lower() == "none":
        s.seed = None
    else:
        try:
            s.seed = int(args[0])
        except ValueError:
            s.say("Usage: seed <n|none>", gui_util.red)
            return
    s.save_settings()
    s.say(f"Set seed to {s.seed}", gui_util.green)

register_command(Command(
    CommandType.GENERAL,
    (
        "seed [n|none]: Set the random seed for optimization",
        "With a seed, optimize and random layouts repeat exactly. "
            "none picks a new seed for every run."
    ),
    ("seed",),
    cmd_seed
))

def cmd_iterations(args: list[str], s: Session):
    if not args:
        s.say(f"Iterations: {gui_util.format_number(s.iterations)}")
        return
    try:
        iterations = int(args[0])
    except ValueError:
        iterations = 0
    if iterations <= 0:
        s.say("Usage: iterations <n>, n > 0", gui_util.red)
        return
    s.iterations = iterations
    s.save_settings()
    s.say(f"Set iterations to {gui_util.format_number(iterations)}",
        gui_util.green)

register_command(Command(
    CommandType.GENERAL,
    ("iterations [n]: Set default number of optimization steps",),
    ("iterations",),
    cmd_iterations
))

def cmd_corpus(args: list[str], s: Session):
    if not args:
        s.say("\n".join((
            "Usage: (note the several subcommands)",
            "corpus <filename>: Set corpus to /corpus/filename",
            "corpus precision <n|full>: "
                "Optimize for the top n trigrams, or all",
            "corpus report_precision <n|full>: "
                "Report on the top n trigrams, or all",
        )), gui_util.red)
        return

    if args[0] in ("precision", "report_precision"):
        field = args[0]
        try:
            value = int(args[1])
        except IndexError:
            s.say(f"Usage: corpus {field} <n|full>", gui_util.red)
            return
        except ValueError:
            if args[1] == "full":
                value = 0
            else:
                s.say("Precision must be an integer or \"full\"",
                    gui_util.red)
                return
        s.corpus_settings[field] = value
    else:
        filename = " ".join(args)
        if not os.path.exists(os.path.join(corpus.CORPUS_DIR, filename)):
            s.say(f"/corpus/{filename} was not found.", gui_util.red)
            return
        s.corpus_settings["filename"] = filename
    s.save_settings()
    target = s.target_corpus
    s.say(f"Corpus: {target.filename}, trigram precision "
        f"{target.precision or 'full'} "
        f"({target.trigram_completeness:.3%})", gui_util.green)

register_command(Command(
    CommandType.DATA,
    (
        "corpus <filename>: Set corpus to /corpus/filename\n"
            "corpus precision <n|full>: "
                "Optimize for the top n trigrams, or all\n"
            "corpus report_precision <n|full>: "
                "Report on the top n trigrams, or all",
        "Only the most frequent trigrams are scored during optimization, "
            "which keeps each step fast. The percentage shown is the share "
            "of all trigrams in the corpus that the precision covers."
    ),
    ("corpus",),
    cmd_corpus
))

def cmd_stats(args: list[str], s: Session):
    target = s.target_corpus
    stats = analysis.corpus_stats(target)
    s.say(f"Corpus: {target.filename}")
    for section in stats.sections:
        s.say(gui_util.heading(
            f"{section.label}: {gui_util.format_number(section.total)} total, "
            f"{gui_util.format_number(section.distinct)} distinct"))
        s.say("\n".join(ngram_columns(section.ngrams, section.total)))
    s.say(gui_util.heading("Overview"))
    s.say(stats.overview)

register_command(Command(
    CommandType.DATA,
    (
        "stats: Show the most frequent n-grams of the corpus",
        "Top 100 unigrams, top 50 bigrams and top 50 trigrams."
    ),
    ("stats",),
    cmd_stats
))

def cmd_analyze(args: list[str], s: Session):
    if args:
        layout_name = " ".join(args)
        try:
            target_layout = layout.get_layout(layout_name)
        except FileNotFoundError:
            s.say(f"/layouts/{layout_name} was not found.", gui_util.red)
            return
    else:
        target_layout = s.analysis_target
    s.say("Crunching the numbers >>>", gui_util.green)

    stats = analysis.layout_stats(
        target_layout, s.target_corpus, s.report_precision)
    s.say(f"\n{target_layout}\n{target_layout.diagram()}")

    s.say(gui_util.heading("Finger usage"))
    s.say("\n".join(gui_util.histogram(
        ((finger_display_names[finger], stats.fingers[finger])
         for finger in Finger if stats.fingers[finger]),
        stats.keystrokes)))

    s.say(gui_util.heading("Hand usage (thumbs excluded)"))
    hand_total = sum(stats.hands.values())
    s.say("  ".join(
        f"{hand}: {gui_util.percentage(count, hand_total)}"
        for hand, count in stats.hands.items()))

    s.say(gui_util.heading("Row usage"))
    s.say("\n".join(gui_util.histogram(
        ((row_display_names[row], stats.rows[row])
         for row in Row if stats.rows[row]),
        stats.keystrokes)))

    s.say(gui_util.heading("Bistroke categories"))
    category_total = sum(stats.categories.values())
    s.say("  ".join(
        f"{category}: {gui_util.percentage(count, category_total)}"
        for category, count in sorted(stats.categories.items())))

    s.say(gui_util.heading("Average multipliers"))
    for multiplier, average in stats.multipliers.items():
        s.say(f"{effort.multiplier_display_names[multiplier]:<16}"
            f"{average:8.4f}")

    print_trigram_effort(s, stats.trigrams)
    s.say(f"\nTotal effort: {gui_util.format_number(stats.total_effort, 2)}",
        gui_util.blue)

register_command(Command(
    CommandType.ANALYSIS,
    (
        "analyze [layout name]: Detailed effort analysis",
        "Uses the target layout if none is given. Finger, hand and row "
            "usage count every character of the corpus. The effort figures "
            "cover the most frequent trigrams (see corpus report_precision)."
    ),
    ("analyze", "a"),
    cmd_analyze
))

def cmd_score(args: list[str], s: Session):
    if not args:
        s.say("Usage: score <trigram> [layout name]", gui_util.red)
        return
    trigram = args[0].lower()
    if len(args) > 1:
        target_layout = layout.get_layout(" ".join(args[1:]))
    else:
        target_layout = s.analysis_target
    score = effort.score_trigram(trigram, target_layout)
    s.say(f"{corpus.display_str(trigram)} on {target_layout.name}")
    for multiplier in effort.score_multipliers:
        s.say(f"{effort.multiplier_display_names[multiplier]:<16}"
            f"{multiplier(trigram, target_layout):8.4f}")
    s.say(f"{'effort':<16}{score:8.4f}", gui_util.blue)

register_command(Command(
    CommandType.ANALYSIS,
    (
        "score <trigram> [layout name]: Show how a trigram is scored",
        "Lists each multiplier. The effort is their product; lower is better."
    ),
    ("score",),
    cmd_score
))

def cmd_optimize(args: list[str], s: Session):
    num_iterations = s.iterations
    args = list(args)
    for item in args:
        try:
            num_iterations = int(item)
            args.remove(item)
            break
        except ValueError:
            continue
    if num_iterations <= 0:
        s.say("Number of iterations must be positive", gui_util.red)
        return

    rng = s.rng()
    if args and args[0].lower() == "random":
        s.say("Scrambling the layout >>>", gui_util.green)
        start = anneal.random_layout(
            s.analysis_target, rng, s.constraintmap_,
            name=f"{s.analysis_target.name}-random")
    elif args:
        start = find_layout(args)
        if start is None:
            s.say(f"/layouts/{' '.join(args)} was not found", gui_util.red)
            return
    else:
        start = s.analysis_target

    # the corpus has already cut these down to the precision setting
    top_trigrams = s.target_corpus.top_trigrams
    s.say(f"Annealing {start.name} with constraintmap "
        f"{s.constraintmap_.name} >>>", gui_util.green)
    s.say(f"Initial effort: "
        f"{effort.fitness(start, top_trigrams, None):,.2f}\n"
        f"{start.diagram()}")

    last_time = -1
    step = None
    for step in anneal.anneal(start, top_trigrams, num_iterations, rng,
                              s.constraintmap_, None):
        current_time = time.perf_counter()
        if current_time - last_time < 0.5:
            continue # dont spam the console by printing
        last_time = current_time
        edit = step.remap.describe(step.layout) if step.remap else "none"
        s.say(f"{(step.i + 1)/num_iterations:.2%} progress, "
            f"temperature = {step.temperature:,.2f}, "
            f"effort = {step.fitness:,.2f}, best = {step.best_fitness:,.2f}, "
            f"last edit: {edit}", gui_util.gray)

    if step is None:
        best = start
        best_fitness = effort.fitness(start, top_trigrams, None)
    else:
        best, best_fitness = step.best_layout, step.best_fitness
    if best is start: # nothing better was found
        best = start.copy(start.name.removesuffix("-annealed") + "-annealed")
    filename = save_layout(best)
    s.analysis_target = best
    s.save_settings()
    s.say(f"Annealing complete, best effort {best_fitness:,.2f}\n"
        f"{best.diagram()}\n"
        f"Saved as /layouts/{filename}\nSet as analysis target",
        gui_util.green)

register_command(Command(
    CommandType.EDITING,
    (
        "optimize|anneal [layout name|random] [n]: "
            "Optimize with simulated annealing",
        "Uses the target layout if none is given; random scrambles the "
            "target first.\n"
            "Considers random swaps allowed by the constraintmap and their "
            "effect on trigram effort. Gets more picky over time about "
            "which swaps it accepts. This is guided by a number called the "
            "temperature, which automatically decreases with time.\n"
            "Finishes after n steps (defaults to the iterations setting). "
            "Saves the best layout found and sets it as the target."
    ),
    ("optimize", "anneal"),
    cmd_optimize
))

def cmd_constraintmap(args: list[str], s: Session):
    if not args:
        s.say(f"Constraintmap: {s.constraintmap_.name} "
            f"({len(s.constraintmap_.free_keys())} free keys)")
        return
    try:
        s.constraintmap_ = constraintmap.get_constraintmap(" ".join(args))
    except FileNotFoundError:
        s.say(f"/constraintmaps/{' '.join(args)} was not found.",
            gui_util.red)
        return
    s.save_settings()
    s.say(f"Set constraintmap to {s.constraintmap_.name}", gui_util.green)

register_command(Command(
    CommandType.EDITING,
    (
        "cm|constraintmap [constraintmap name]: Set constraintmap",
        "Refers to a constraintmap in /constraintmaps/. Pinned keys never "
            "move during optimization."
    ),
    ("constraintmap", "cm"),
    cmd_constraintmap
))

def cmd_graph(args: list[str], s: Session):
    args = list(args)
    if not args or args[0] not in ("fingers", "anneal"):
        s.say("Usage: graph fingers|anneal [layout name] [n] [path]",
            gui_util.red)
        return
    kind = args.pop(0)
    path = None
    if args and os.path.splitext(args[-1])[1]:
        path = args.pop()
    num_iterations = s.iterations
    if kind == "anneal" and args:
        try:
            num_iterations = int(args[-1])
            args.pop()
        except ValueError:
            pass
    if args:
        target_layout = find_layout(args)
        if target_layout is None:
            s.say(f"/layouts/{' '.join(args)} was not found", gui_util.red)
            return
    else:
        target_layout = s.analysis_target

    if kind == "fingers":
        graphs.plot_finger_usage(
            analysis.finger_usage(target_layout, s.target_corpus), path)
    else:
        s.say("Annealing >>>", gui_util.green)
        result = anneal.optimize(
            target_layout, s.target_corpus.top_trigrams, num_iterations,
            s.rng(), s.constraintmap_, None)
        graphs.plot_history(result, path)
    if path:
        s.say(f"Saved graph as {path}", gui_util.green)

register_command(Command(
    CommandType.ANALYSIS,
    (
        "graph fingers|anneal [layout name] [n] [path]: Draw a chart",
        "fingers: keystrokes per finger.\n"
            "anneal: best effort so far over n optimization steps. "
            "The optimized layout is not saved.\n"
            "Shows the chart in a window unless a path to save it to is given."
    ),
    ("graph",),
    cmd_graph
))

def cmd_help(args: list[str], s: Session):
    help_text = [
        "",
        "Command <required thing> [optional thing] option1|option2",
    ]

    if not args:
        help_text = cmd_help_intro(help_text)
    else:
        try:
            cat = CommandType[args[0].upper()]
            help_text = cmd_help_cat(help_text, cat)
        except KeyError:
            cmd: Command = by_name.get(args[0], None)
            if cmd is None:
                s.say("Unrecognized command", gui_util.red)
                return
            help_text = cmd_help_cmd(help_text, cmd)

    for line in help_text:
        if ":" in line:
            white_part, rest = line.split(":", 1)
            s.say(white_part + ":" + gui_util.colored(
                rest, gui_util.blue if s.color else 0))
        else:
            s.say(line)

def cmd_help_intro(l: list[str]):
    l.extend((
        "-----Command categories-----",
        "Use help <category> to list commands in one of these categories:",
    ))
    l.extend(cat.name for cat in CommandType)
    l.extend((
        "-----Repeating commands-----",
        "Precede with a number to execute the command n times.",
        "For example, \"keyanneal 10 optimize random\".",
    ))
    return l

def cmd_help_cat(l: list[str], cat: CommandType):
    l.append(f"Commands in category {cat.name}:")
    l.extend(cmd.help[0] for cmd in sorted(
        (cmd for cmd in commands if cmd.type == cat),
        key=lambda c: c.names[0]))
    l.append("Use help <command> to view per-command help")
    return l

def cmd_help_cmd(l: list[str], cmd: Command):
    l.append("")
    l.extend(cmd.help)
    l.append(f"\nAliases: {', '.join(cmd.names)}")
    return l

register_command(Command(
    CommandType.GENERAL,
    ("help [category or command]: List or explain commands",),
    ("help", "h"),
    cmd_help
))

# Helper functions

def print_trigram_effort(s: Session, rows: list[analysis.TrigramEffort]):
    s.say(gui_util.heading("Trigram effort"))
    s.say(f"{'trigram':<9}{'count':>9}{'score':>10}{'total':>13}")
    if not rows:
        return
    scores = [row.score for row in rows]
    worst, best = max(scores), min(scores)
    for row in rows:
        color = gui_util.color_scale(worst, best, row.score) if s.color else 0
        s.say(f"{corpus.display_str(row.trigram):<9}"
            f"{gui_util.format_number(row.count):>9}"
            + gui_util.colored(f"{row.score:10.4f}", color)
            + f"{gui_util.format_number(row.total, 2):>13}")

def ngram_columns(ngrams: Iterable[tuple[str, int]], total: int,
                  columns: int = 5) -> list[str]:
    cells = [f"{corpus.display_str(ngram):<5}"
             f"{gui_util.percentage(count, total):>7}"
             for ngram, count in ngrams]
    return ["   ".join(cells[i:i+columns])
            for i in range(0, len(cells), columns)]

def save_layout(layout_: layout.Layout) -> str:
    """Writes the layout to /layouts/ without overwriting anything, renames
    it to match the file, and makes it loadable by name. Returns the
    filename."""
    filename = analysis.find_free_filename(
        layout_.name.lower(), ".json", layout.LAYOUT_DIR + os.sep)
    layout_.name = filename[:-len(".json")]
    with open(layout.layout_path(layout_.name), "w",
              encoding="utf-8") as file:
        file.write(repr(layout_))
    layout.Layout.loaded[layout_.name] = layout_
    return filename

def find_layout(tokens: Iterable[str]) -> layout.Layout | None:
    """The layout named by the tokens joined with spaces, or None."""
    try:
        return layout.get_layout(" ".join(tokens))
    except FileNotFoundError:
        return None
