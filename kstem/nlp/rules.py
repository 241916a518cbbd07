"""Suffix rule cascade for dictionary-validated English stemming.

Seventeen rules run in a fixed order. Each rule recognises one suffix
family and proposes rewritten candidates, checking each against the
dictionary:

- Dictionary-gated rules commit the first candidate found in the
  dictionary. When none is found they either roll back (return None) or
  commit a documented default rewrite.
- Productive rules (-ness, -ism, and the -ability/-ivity/-ality branches
  of -ity) rewrite unconditionally, since the residue of those suffixes
  is reliably a stem.

Every rule has the signature ``(WordBuffer, Dictionary) -> WordBuffer | None``.
Returning None leaves the caller's buffer untouched. apply_cascade() runs
the rules in order and stops at the first buffer that is a dictionary key.

Candidate ORDER inside each rule is significant: reordering changes the
stems of real words.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Final

from kstem.lexicon.dictionary import Dictionary, DictionaryEntry
from kstem.nlp.letters import has_doubled_consonant, has_vowel_in_stem, is_consonant
from kstem.nlp.word_buffer import WordBuffer

Rule = Callable[[WordBuffer, Dictionary], WordBuffer | None]


# =============================================================================
# Candidate helpers
# =============================================================================


def _known(dictionary: Dictionary, candidate: WordBuffer) -> bool:
    return dictionary.lookup(candidate.chars) is not None


def _first_known(dictionary: Dictionary, *candidates: WordBuffer) -> WordBuffer | None:
    """Return the first candidate that is a dictionary key."""
    for candidate in candidates:
        if _known(dictionary, candidate):
            return candidate
    return None


def _accepts(dictionary: Dictionary, candidate: WordBuffer) -> bool:
    """Known and not exception-flagged."""
    entry = dictionary.lookup(candidate.chars)
    return entry is not None and not entry.is_exception


def _drop_last(buffer: WordBuffer) -> WordBuffer:
    return buffer.with_chars(buffer.chars[:-1])


# =============================================================================
# Inflectional rules
# =============================================================================


def plural(buffer: WordBuffer, dictionary: Dictionary) -> WordBuffer | None:
    """-ies, -es and plain -s plurals.

    Crosses keeps its double s: "crosses" never tries "crosse".
    """
    word = buffer.chars
    if word[-1] != "s":
        return None

    match = buffer.ends_in("ies")
    if match is not None:
        candidate = match.with_ending("ie")  # calories -> calorie
        if _known(dictionary, candidate):
            return candidate
        return match.with_ending("y")

    match = buffer.ends_in("es")
    if match is not None:
        stem = match.stem
        try_e = match.j > 0 and not (stem[-1] == "s" and stem[-2] == "s")
        if try_e:
            candidate = match.with_ending("e")
            if _known(dictionary, candidate):
                return candidate
        candidate = match.with_ending("")
        if _known(dictionary, candidate):
            return candidate
        return match.with_ending("e")

    if len(word) > 3 and word[-2] != "s" and not word.endswith("ous"):
        return _drop_last(buffer)
    return None


def past_tense(buffer: WordBuffer, dictionary: Dictionary) -> WordBuffer | None:
    """-ied and -ed.

    Words of four letters or fewer are left to direct conflations
    (fled -> flee), so "fled" never becomes "fl".
    """
    if len(buffer) <= 4:
        return None

    match = buffer.ends_in("ied")
    if match is not None:
        candidate = match.with_ending("ie")
        if _known(dictionary, candidate):
            return candidate
        return match.with_ending("y")

    match = buffer.ends_in("ed")
    if match is None or not has_vowel_in_stem(match):
        return None

    candidate = match.with_ending("e")
    if _accepts(dictionary, candidate):
        return candidate

    stripped = match.with_ending("")
    if _known(dictionary, stripped):
        return stripped

    # backfilled -> backfill: keep the doubled consonant unless the
    # undoubled form is a word
    if has_doubled_consonant(stripped.chars, stripped.k):
        undoubled = _drop_last(stripped)
        if _known(dictionary, undoubled):
            return undoubled
        return stripped

    # un- words are left alone
    if buffer.chars.startswith("un"):
        return None

    # microcoded -> microcode
    return match.with_ending("e")


def aspect(buffer: WordBuffer, dictionary: Dictionary) -> WordBuffer | None:
    """-ing.

    Words of five letters or fewer are skipped (thing, sing).
    """
    if len(buffer) <= 5:
        return None

    match = buffer.ends_in("ing")
    if match is None or not has_vowel_in_stem(match):
        return None

    candidate = match.with_ending("e")
    if _accepts(dictionary, candidate):
        return candidate

    stripped = match.with_ending("")
    if _known(dictionary, stripped):
        return stripped

    # fingerspelling -> fingerspell
    if has_doubled_consonant(stripped.chars, stripped.k):
        undoubled = _drop_last(stripped)
        if _known(dictionary, undoubled):
            return undoubled
        return stripped

    # footstamping -> footstamp, microcoding -> microcode
    j = match.j
    if j > 0 and is_consonant(stripped.chars, j) and is_consonant(stripped.chars, j - 1):
        return stripped
    return match.with_ending("e")


# =============================================================================
# Derivational rules
# =============================================================================


def ity_endings(buffer: WordBuffer, dictionary: Dictionary) -> WordBuffer | None:
    """-ity, with productive -ability/-ibility, -ivity and -ality.

    Any other -ity word rolls back when neither candidate is known.
    """
    match = buffer.ends_in("ity")
    if match is None:
        return None

    found = _first_known(dictionary, match.with_ending(""), match.with_ending("e"))
    if found is not None:
        return found

    stem, j = match.stem, match.j
    if j > 0:
        if stem[j - 1] == "i" and stem[j] == "l":
            return match.with_chars(stem[: j - 1] + "le")
        if stem[j - 1] == "i" and stem[j] == "v":
            return match.with_ending("e")
        if stem[j - 1] == "a" and stem[j] == "l":
            return match.with_ending("")

    return None


def ness_endings(buffer: WordBuffer, dictionary: Dictionary) -> WordBuffer | None:  # noqa: ARG001
    """-ness, productive: happiness -> happy."""
    match = buffer.ends_in("ness")
    if match is None:
        return None
    stem = match.stem
    if stem.endswith("i"):
        stem = stem[:-1] + "y"
    return match.with_chars(stem)


def ion_endings(buffer: WordBuffer, dictionary: Dictionary) -> WordBuffer | None:
    """-ization, -ition, -ation, -ication and -ion, most specific first."""
    match = buffer.ends_in("ion")
    if match is None:
        return None

    ization = buffer.ends_in("ization")
    if ization is not None:
        return ization.with_ending("ize")

    ition = buffer.ends_in("ition")
    if ition is not None:
        # definition -> define, opposition -> oppose
        if _known(dictionary, candidate := ition.with_ending("e")):
            return candidate
    elif (ation := buffer.ends_in("ation")) is not None:
        # elimination -> eliminate, resignation -> resign
        found = _first_known(
            dictionary,
            ation.with_ending("ate"),
            ation.with_ending("e"),
            ation.with_ending(""),
        )
        if found is not None:
            return found

    # after -ation, so complication -> complicate rather than comply
    ication = buffer.ends_in("ication")
    if ication is not None:
        if _known(dictionary, candidate := ication.with_ending("y")):
            return candidate

    return _first_known(dictionary, match.with_ending("e"), match.with_ending(""))


def er_and_or_endings(buffer: WordBuffer, dictionary: Dictionary) -> WordBuffer | None:
    """-izer, -er and -or."""
    if buffer.chars[-1] != "r":
        return None

    izer = buffer.ends_in("izer")
    if izer is not None:
        return izer.with_ending("ize")

    match = buffer.ends_in("er")
    if match is None:
        match = buffer.ends_in("or")
    if match is None:
        return None

    stem, j = match.stem, match.j
    candidates: list[WordBuffer] = []
    if has_doubled_consonant(stem, j):
        candidates.append(match.with_chars(stem[:-1]))
    if stem[j] == "i":
        candidates.append(match.with_chars(stem[:-1] + "y"))  # happier -> happy
    if stem[j] == "e":
        candidates.append(match.with_chars(stem[:-1]))  # -eer
    candidates.extend(
        (
            _drop_last(match),  # remove the -r
            match.with_ending(""),
            match.with_ending("e"),
        )
    )
    return _first_known(dictionary, *candidates)


def ly_endings(buffer: WordBuffer, dictionary: Dictionary) -> WordBuffer | None:
    """-ly. The default is to remove it."""
    match = buffer.ends_in("ly")
    if match is None:
        return None

    stripped = match.with_ending("")
    found = _first_known(dictionary, match.with_ending("le"), stripped)
    if found is not None:
        return found

    stem, j = match.stem, match.j
    if j > 0 and stem[j - 1] == "a" and stem[j] == "l":
        return stripped  # -ally -> -al
    if j > 0 and stem[j - 1] == "a" and stem[j] == "b":
        return match.with_ending("le")  # -ably -> -able

    if stem[j] == "i":
        # militarily -> military
        if _known(dictionary, candidate := match.with_chars(stem[:-1] + "y")):
            return candidate

    return stripped


def al_endings(buffer: WordBuffer, dictionary: Dictionary) -> WordBuffer | None:
    """-al, -ical and -ial."""
    if len(buffer) < 4:
        return None
    match = buffer.ends_in("al")
    if match is None:
        return None

    stem, j = match.stem, match.j
    candidates = [match.with_ending("")]
    if has_doubled_consonant(stem, j):
        candidates.append(match.with_chars(stem[:-1]))
    candidates.append(match.with_ending("e"))
    candidates.append(match.with_ending("um"))  # optimal -> optimum
    found = _first_known(dictionary, *candidates)
    if found is not None:
        return found

    if j > 0 and stem[j - 1] == "i" and stem[j] == "c":
        base = stem[: j - 1]
        found = _first_known(
            dictionary,
            match.with_chars(base),
            match.with_chars(base + "y"),  # bibliographical -> bibliography
        )
        if found is not None:
            return found
        return match.with_ending("")  # -ical -> -ic

    if stem[j] == "i":
        return _first_known(dictionary, match.with_chars(stem[:-1]))

    return None


def ive_endings(buffer: WordBuffer, dictionary: Dictionary) -> WordBuffer | None:
    """-ive, -ative, and -ive -> -ion (injunctive -> injunction)."""
    match = buffer.ends_in("ive")
    if match is None:
        return None

    stem, j = match.stem, match.j
    candidates = [match.with_ending(""), match.with_ending("e")]
    if j > 0 and stem[j - 1] == "a" and stem[j] == "t":
        base = stem[: j - 1]
        candidates.append(match.with_chars(base + "e"))  # determinative -> determine
        candidates.append(match.with_chars(base))
    candidates.append(match.with_ending("ion"))
    return _first_known(dictionary, *candidates)


def ize_endings(buffer: WordBuffer, dictionary: Dictionary) -> WordBuffer | None:
    """-ize."""
    match = buffer.ends_in("ize")
    if match is None:
        return None

    stem, j = match.stem, match.j
    candidates = [match.with_ending("")]
    if has_doubled_consonant(stem, j):
        candidates.append(match.with_chars(stem[:-1]))
    candidates.append(match.with_ending("e"))
    return _first_known(dictionary, *candidates)


def ment_endings(buffer: WordBuffer, dictionary: Dictionary) -> WordBuffer | None:
    """-ment."""
    match = buffer.ends_in("ment")
    if match is None:
        return None
    return _first_known(dictionary, match.with_ending(""))


def ble_endings(buffer: WordBuffer, dictionary: Dictionary) -> WordBuffer | None:
    """-able and -ible."""
    match = buffer.ends_in("ble")
    if match is None:
        return None

    stem, j = match.stem, match.j
    if stem[j] not in ("a", "i"):
        return None

    base = stem[:j]
    candidates = [match.with_chars(base)]
    if has_doubled_consonant(base, j - 1):
        candidates.append(match.with_chars(base[:-1]))
    candidates.append(match.with_chars(base + "e"))
    candidates.append(match.with_chars(base + "ate"))  # compensable -> compensate
    return _first_known(dictionary, *candidates)


def ism_endings(buffer: WordBuffer, dictionary: Dictionary) -> WordBuffer | None:  # noqa: ARG001
    """-ism, productive."""
    match = buffer.ends_in("ism")
    if match is None:
        return None
    return match.with_ending("")


def ic_endings(buffer: WordBuffer, dictionary: Dictionary) -> WordBuffer | None:
    """-ic."""
    match = buffer.ends_in("ic")
    if match is None:
        return None
    return _first_known(
        dictionary,
        match.with_chars(match.chars + "al"),
        match.with_ending("y"),
        match.with_ending("e"),
        match.with_ending(""),
    )


def ncy_endings(buffer: WordBuffer, dictionary: Dictionary) -> WordBuffer | None:
    """-ancy and -ency. The default is -nce."""
    match = buffer.ends_in("ncy")
    if match is None:
        return None
    if match.stem[-1] not in ("a", "e"):
        return None

    candidate = match.with_ending("nt")
    if _known(dictionary, candidate):
        return candidate
    return match.with_ending("nce")


def nce_endings(buffer: WordBuffer, dictionary: Dictionary) -> WordBuffer | None:
    """-ance and -ence."""
    match = buffer.ends_in("nce")
    if match is None:
        return None
    if match.stem[-1] not in ("a", "e"):
        return None

    base = match.stem[:-1]
    return _first_known(
        dictionary,
        match.with_chars(base + "e"),  # adherence -> adhere
        match.with_chars(base),  # disappearance -> disappear
    )


# =============================================================================
# Cascade
# =============================================================================

RULE_CASCADE: Final[tuple[tuple[str, Rule], ...]] = (
    ("plural", plural),
    ("past_tense", past_tense),
    ("aspect", aspect),
    ("ity", ity_endings),
    ("ness", ness_endings),
    ("ion", ion_endings),
    ("er_or", er_and_or_endings),
    ("ly", ly_endings),
    ("al", al_endings),
    ("ive", ive_endings),
    ("ize", ize_endings),
    ("ment", ment_endings),
    ("ble", ble_endings),
    ("ism", ism_endings),
    ("ic", ic_endings),
    ("ncy", ncy_endings),
    ("nce", nce_endings),
)


@dataclass(frozen=True, slots=True)
class CascadeResult:
    """
    Outcome of running the rule cascade on one word.

    Attributes:
        buffer: Buffer after the last rule that ran.
        entry: Dictionary entry of the accepted stem, or None when no rule
            produced a dictionary word.
        rule: Name of the rule after which the stem was accepted.
    """

    buffer: WordBuffer
    entry: DictionaryEntry | None = None
    rule: str | None = None

    @property
    def matched(self) -> bool:
        return self.entry is not None


def apply_cascade(
    buffer: WordBuffer,
    dictionary: Dictionary,
    rules: tuple[tuple[str, Rule], ...] = RULE_CASCADE,
) -> CascadeResult:
    """Run ``rules`` in order until the buffer becomes a dictionary word.

    The dictionary is re-checked after every rule, whether the rule
    committed a rewrite or rolled back.

    Args:
        buffer: Lower-cased word that is not itself a dictionary key.
        dictionary: Dictionary candidates are validated against.
        rules: Ordered (name, rule) pairs.

    Returns:
        CascadeResult with the final buffer and the accepted entry, if any.
    """
    for name, rule in rules:
        candidate = rule(buffer, dictionary)
        if candidate is not None:
            buffer = candidate
        entry = dictionary.lookup(buffer.chars)
        if entry is not None:
            return CascadeResult(buffer=buffer, entry=entry, rule=name)
    return CascadeResult(buffer=buffer)
