#!/usr/bin/env python3
"""
Generate fictitious contact names and e-mail addresses for seeding test
databases, either as SQL ``INSERT`` statements or as ``Nome;E-mail`` CSV.

Names and domains are composed from three plain-text dictionaries that live
next to this module (``lista_palavras_pt-br``, ``lista_cid``, ``lista_tld``).

Modes
~~~~~
* **SQL batch** – a query template was given and ``continuous`` is on: one
  ``INSERT ... VALUES (...), (...);`` statement.
* **SQL per row** – a query template was given, ``continuous`` is off: one
  statement per generated contact.
* **CSV** – no query template: ``Nome;E-mail`` header plus one line per contact.

Example
~~~~~~~
GeneratorConfig.start() \\
    .set_count(10) \\
    .set_continuous_query(False) \\
    .set_brazil_only(True) \\
    .set_query(
        "INSERT INTO contato (nome, email, ip)",
        '("%LENOME%", "%EMAILME%", "127.0.0.1")',
    )

python email_generator.py --count 10 --brazil-only \\
    --columns "INSERT INTO contato (nome, email)" \\
    --values '("%LENOME%", "%EMAILME%")' \\
    --write-file
"""
from __future__ import annotations

import argparse
import random
import re
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, TextIO, Tuple

from faker import Faker

# === Configuration Section ===
DEFAULT_COUNT = 10
DICTIONARY_DIR = Path(__file__).resolve().parent
WORDS_FILE = "lista_palavras_pt-br"
CITY_CODES_FILE = "lista_cid"
TLDS_FILE = "lista_tld"
NAME_PLACEHOLDER = "%LENOME%"
EMAIL_PLACEHOLDER = "%EMAILME%"
CSV_HEADER = "Nome;E-mail"
BRAZIL_TLD = "br"
TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"
FAKER_LOCALE = "pt_BR"
BOOTSTRAP_WORDS = 400
BOOTSTRAP_DRAWS = 500
SEED = None  # None -> unseeded run

######################################################################
# Errors
######################################################################

class ErrorKind(Enum):
    CONFIG_TYPE = "config_type"
    MISSING_RESOURCE = "missing_resource"
    ZERO_COUNT = "zero_count"


class GeneratorError(ValueError):
    """Fatal generation problem; the run stops before producing output."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind

######################################################################
# Configuration builder
######################################################################

class OutputMode(Enum):
    SQL_BATCH = "sql_batch"
    SQL_PER_ROW = "sql_per_row"
    CSV = "csv"


class GeneratorConfig:
    """Chained builder for a generation run. Every setter returns ``self``."""

    def __init__(self) -> None:
        self.count = 0
        self.continuous_query = False
        self.brazil_only = False
        self.column_clause = ""
        self.value_template = ""

    @classmethod
    def start(cls) -> "GeneratorConfig":
        return cls()

    def set_count(self, value) -> "GeneratorConfig":
        # bool is an int subclass but never a valid count
        if not isinstance(value, int) or isinstance(value, bool):
            raise GeneratorError(
                ErrorKind.CONFIG_TYPE,
                f"count must be a whole number, got {type(value).__name__}",
            )
        if value < 0:
            raise GeneratorError(ErrorKind.CONFIG_TYPE, f"count must not be negative, got {value}")
        self.count = value
        return self

    def set_continuous_query(self, value) -> "GeneratorConfig":
        self.continuous_query = _require_bool("continuous_query", value)
        return self

    def set_brazil_only(self, value) -> "GeneratorConfig":
        self.brazil_only = _require_bool("brazil_only", value)
        return self

    def set_query(self, column_clause: str, value_template: str) -> "GeneratorConfig":
        self.column_clause = column_clause
        self.value_template = value_template
        return self

    @property
    def output_mode(self) -> OutputMode:
        if not (self.column_clause and self.value_template):
            return OutputMode.CSV
        return OutputMode.SQL_BATCH if self.continuous_query else OutputMode.SQL_PER_ROW


def _require_bool(field: str, value) -> bool:
    if not isinstance(value, bool):
        raise GeneratorError(
            ErrorKind.CONFIG_TYPE,
            f"{field} must be a bool, not {type(value).__name__}",
        )
    return value

######################################################################
# Dictionaries
######################################################################

class Dictionary:
    """The three word lists a run draws from, each kept with its size."""

    def __init__(self, words: Sequence[str], city_codes: Sequence[str], tlds: Sequence[str]):
        self.words: Tuple[str, ...] = tuple(words)
        self.city_codes: Tuple[str, ...] = tuple(city_codes)
        self.tlds: Tuple[str, ...] = tuple(tlds)
        self.sizes: Dict[str, int] = {
            "words": len(self.words),
            "city-codes": len(self.city_codes),
            "tlds": len(self.tlds),
        }

    def pick(self, name: str, rng: random.Random) -> str:
        entries = {"words": self.words, "city-codes": self.city_codes, "tlds": self.tlds}[name]
        return entries[rng.randint(0, self.sizes[name] - 1)]


_MISSING_MESSAGES = {
    WORDS_FILE: "word list not found at {path}; names cannot be made up from nothing",
    CITY_CODES_FILE: "city code list not found at {path}; domains need city codes",
    TLDS_FILE: "top-level domain list not found at {path}; domains need a TLD",
}


def read_word_list(path: Path) -> List[str]:
    """One entry per line, trailing newline stripped, nothing else touched."""
    with path.open("r", encoding="utf-8", newline="") as fh:
        return [line.rstrip("\r\n") for line in fh]


def load_dictionary(directory: Optional[Path] = None) -> Dictionary:
    directory = Path(directory) if directory is not None else DICTIONARY_DIR
    paths = [directory / name for name in (WORDS_FILE, CITY_CODES_FILE, TLDS_FILE)]

    # all three must exist before anything is read
    for p in paths:
        if not p.exists():
            raise GeneratorError(ErrorKind.MISSING_RESOURCE, _MISSING_MESSAGES[p.name].format(path=p))

    lists = [read_word_list(p) for p in paths]
    for p, entries in zip(paths, lists):
        if not entries:
            raise GeneratorError(ErrorKind.MISSING_RESOURCE, f"{p.name} at {p} has no entries")

    words, city_codes, tlds = lists
    return Dictionary(words, city_codes, tlds)

######################################################################
# Text helpers
######################################################################

_ACCENTED = "ÀÁÂÃÄÅÆÇÈÉÊËÌÍÎÏÐÑÒÓÔÕÖØÙÚÛÜÝÞßàáâãäåæçèéêëìíîïðñòóôõöøùúûüýýþÿŔŕ"
_FOLDED = "aaaaaaaceeeeiiiidnoooooouuuuybsaaaaaaaceeeeiiiidnoooooouuuuyybyRr"
ACCENT_TABLE = str.maketrans(_ACCENTED, _FOLDED)

_WORD_START = re.compile(r"(^|[ \t\r\n\f\v])(\S)")


def normalize(text: str, space_replacement: str = "") -> str:
    """Slug-like form for e-mail parts: spaces replaced, accents folded, lowercased."""
    return text.replace(" ", space_replacement).translate(ACCENT_TABLE).lower()


def ucwords(text: str) -> str:
    """Uppercase the first character of every word, leaving the rest as is."""
    return _WORD_START.sub(lambda m: m.group(1) + _upper_initial(m.group(2)), text)


def _upper_initial(char: str) -> str:
    # "ß".upper() is "SS"; keep characters whose uppercase is longer
    upper = char.upper()
    return upper if len(upper) == 1 else char

######################################################################
# Fake contacts
######################################################################

def fake_contact(dictionary: Dictionary, rng: random.Random, brazil_only: bool = False) -> Dict[str, str]:
    given = dictionary.pick("words", rng)
    surname = " " + dictionary.pick("words", rng) if rng.randint(0, 1) == 0 else ""

    domain = normalize(dictionary.pick("words", rng))
    # the coin is drawn even when brazil_only already decides the branch
    coin = rng.randint(0, 1) == 0
    if coin or brazil_only:
        city = dictionary.pick("city-codes", rng)
        country = BRAZIL_TLD if brazil_only else dictionary.pick("tlds", rng)
        domain += f".{city}.{country}"
    else:
        domain += "." + dictionary.pick("tlds", rng)

    local = normalize(given)
    if surname:
        local += "." + normalize(surname)

    return {
        "name": ucwords(given) + ucwords(surname),
        "email": f"{local}@{domain}",
    }


def fill_template(template: str, contact: Dict[str, str]) -> str:
    return template.replace(NAME_PLACEHOLDER, contact["name"]).replace(EMAIL_PLACEHOLDER, contact["email"])

######################################################################
# Output
######################################################################

def render_lines(config: GeneratorConfig, dictionary: Dictionary, rng: random.Random) -> Iterator[str]:
    """Yield output lines for ``config.output_mode``; contacts are built lazily."""
    mode = config.output_mode
    contacts = (fake_contact(dictionary, rng, config.brazil_only) for _ in range(config.count))

    if mode is OutputMode.SQL_BATCH:
        fragments = [fill_template(config.value_template, c) for c in contacts]
        yield f"{config.column_clause} VALUES {', '.join(fragments)};"
    elif mode is OutputMode.SQL_PER_ROW:
        for c in contacts:
            yield f"{config.column_clause} VALUES {fill_template(config.value_template, c)};"
    else:
        yield CSV_HEADER
        for c in contacts:
            yield f"{c['name']};{c['email']}"


def output_filename(mode: OutputMode, now: datetime) -> str:
    stamp = now.strftime(TIMESTAMP_FORMAT)
    return f"csv_{stamp}.csv" if mode is OutputMode.CSV else f"sql_{stamp}.sql"


def go_around(
    config: GeneratorConfig,
    *,
    pre: bool = False,
    write_file: bool = False,
    stream: Optional[TextIO] = None,
    rng: Optional[random.Random] = None,
    dictionary_dir: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    now: Optional[datetime] = None,
) -> Optional[Path]:
    """Run one generation; returns the written file path when ``write_file`` is set."""
    if config.count == 0:
        raise GeneratorError(ErrorKind.ZERO_COUNT, "refusing to generate 0 e-mails; set a count above zero")

    dictionary = load_dictionary(dictionary_dir)
    stream = stream if stream is not None else sys.stdout
    rng = rng if rng is not None else random.Random(SEED)

    out_path: Optional[Path] = None
    fh = None
    if write_file:
        out_path = Path(output_dir or ".") / output_filename(config.output_mode, now or datetime.now())
        fh = out_path.open("w", encoding="utf-8")

    try:
        if pre:
            stream.write("<pre>\n")
        for line in render_lines(config, dictionary, rng):
            stream.write(line + "\n")
            if fh is not None:
                fh.write(line + "\n")
        if pre:
            stream.write("</pre>\n")
    finally:
        if fh is not None:
            fh.close()

    if out_path is not None:
        print(f"[+] Wrote {out_path} with {config.count} records.", file=sys.stderr)
    return out_path

######################################################################
# Dictionary bootstrap
######################################################################

def build_dictionaries(faker: Faker, n_words: int = BOOTSTRAP_WORDS, n_draws: int = BOOTSTRAP_DRAWS) -> Dictionary:
    words: List[str] = []
    seen = set()
    for i in range(n_words * 3):
        if len(words) >= n_words:
            break
        word = (faker.first_name() if i % 2 == 0 else faker.last_name()).lower()
        if word not in seen:
            seen.add(word)
            words.append(word)

    city_codes = sorted({faker.estado_sigla().lower() for _ in range(n_draws)})
    tlds = sorted({faker.tld() for _ in range(n_draws)} | {BRAZIL_TLD, "com"})
    return Dictionary(words, city_codes, tlds)


def write_dictionaries(directory: Path, dictionary: Dictionary) -> List[Path]:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    written = []
    for name, entries in (
        (WORDS_FILE, dictionary.words),
        (CITY_CODES_FILE, dictionary.city_codes),
        (TLDS_FILE, dictionary.tlds),
    ):
        path = directory / name
        path.write_text("\n".join(entries) + "\n", encoding="utf-8")
        print(f"[+] Wrote {path} ({len(entries)} entries).", file=sys.stderr)
        written.append(path)
    return written

######################################################################
# Main CLI
######################################################################

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate fake names and e-mails as SQL inserts or CSV.")
    parser.add_argument("--count", type=int, default=DEFAULT_COUNT)
    parser.add_argument("--continuous", action="store_true", help="One batched INSERT instead of one per row")
    parser.add_argument("--brazil-only", action="store_true", help="Every domain ends in .<city>.br")
    parser.add_argument("--columns", help='Column clause, e.g. "INSERT INTO t (nome, email)"')
    parser.add_argument("--values", help=f'Value template using {NAME_PLACEHOLDER} and {EMAIL_PLACEHOLDER}')
    parser.add_argument("--pre", action="store_true", help="Wrap console output in <pre> tags")
    parser.add_argument("--write-file", action="store_true", help="Also write a timestamped .sql/.csv file")
    parser.add_argument("--output-dir", type=Path, default=Path("."))
    parser.add_argument("--dict-dir", type=Path, default=DICTIONARY_DIR)
    parser.add_argument("--seed", type=int, default=SEED)
    parser.add_argument("--init-dictionaries", action="store_true",
                        help="Write Faker-built dictionaries into --dict-dir and exit")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.init_dictionaries:
        faker = Faker(FAKER_LOCALE)
        if args.seed is not None:
            faker.seed_instance(args.seed)
        write_dictionaries(args.dict_dir, build_dictionaries(faker))
        return 0

    if bool(args.columns) != bool(args.values):
        parser.error("--columns and --values must be given together")

    try:
        config = (
            GeneratorConfig.start()
            .set_count(args.count)
            .set_continuous_query(args.continuous)
            .set_brazil_only(args.brazil_only)
            .set_query(args.columns or "", args.values or "")
        )
        go_around(
            config,
            pre=args.pre,
            write_file=args.write_file,
            rng=random.Random(args.seed),
            dictionary_dir=args.dict_dir,
            output_dir=args.output_dir,
        )
    except GeneratorError as exc:
        print(f"[!] {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
