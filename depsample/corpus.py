# depsample/corpus.py
import re
import random
import logging
from pathlib import Path
from typing import List, Optional, Union

from conllu import parse_incr

from depsample.core.data_structures import Token

logger = logging.getLogger(__name__)

# Демонстрационные предложения для профилирования
SAMPLE_SENTENCES = [
    "The quick brown fox jumps over the lazy dog",
    "A beautiful sunset painted the sky with vibrant colors",
    "Scientists discovered a new species in the rainforest",
    "The ancient castle stood majestically on the hilltop",
    "Children played happily in the sunny park",
    "Technology advances rapidly in modern society",
    "The orchestra performed brilliantly at the concert hall",
    "Mountains rise dramatically above the valley floor",
    "Researchers analyze data carefully before drawing conclusions",
    "The garden blooms beautifully in spring",
    "Students study diligently for their final examinations",
    "The river flows gently through the peaceful countryside",
    "Artists create masterpieces with passion and dedication",
    "The storm approached quickly from the distant horizon",
    "Customers appreciate excellent service at restaurants",
    "The museum displays fascinating artifacts from ancient civilizations",
    "Engineers design innovative solutions for complex problems",
    "Birds migrate annually to warmer climates",
    "The company announced exciting plans for expansion",
    "Volunteers help tirelessly in community projects",
]

# UPOS -> категории модели оценки. Остальные теги сохраняются как есть
# и получают оценку по умолчанию.
UPOS_MAPPING = {
    "NOUN": "Noun",
    "PROPN": "Noun",
    "PRON": "Noun",
    "VERB": "Verb",
    "AUX": "Verb",
    "ADJ": "Adjective",
    "ADV": "Adverb",
    "DET": "Determiner",
    "ADP": "Preposition",
    "CCONJ": "Conjunction",
    "SCONJ": "Conjunction",
}


class RuleBasedTagger:
    """
    Пробельная токенизация + POS по словарям и суффиксам.
    Правила проверяются по порядку, по умолчанию - Noun.
    """

    def __init__(self):
        self.determiners = re.compile(r'^(the|a|an)$')
        self.verbs = re.compile(
            r'^(is|are|was|were|be|been|being|am|has|have|had|do|does|did|'
            r'can|could|will|would|should|may|might|must)$'
        )
        self.conjunctions = re.compile(r'^(and|or|but|if|when|where|while|because|although)$')
        self.prepositions = re.compile(
            r'^(in|on|at|to|for|with|from|by|about|over|under|above|below|'
            r'through|during|before|after)$'
        )
        self.adverbs = re.compile(
            r'^(very|quickly|slowly|carefully|happily|beautifully|rapidly|dramatically|gently|'
            r'diligently|brilliantly|peacefully|passionately|annually|tirelessly|majestically)$'
        )
        self.adjectives = re.compile(
            r'^(quick|brown|lazy|beautiful|vibrant|ancient|sunny|modern|final|peaceful|'
            r'complex|warm|exciting|excellent|new)$'
        )

    def tag_word(self, word: str) -> str:
        lower = word.lower()

        if self.determiners.match(lower):
            return "Determiner"
        if self.verbs.match(lower):
            return "Verb"
        if self.conjunctions.match(lower):
            return "Conjunction"
        if self.prepositions.match(lower):
            return "Preposition"
        if self.adverbs.match(lower):
            return "Adverb"
        if self.adjectives.match(lower):
            return "Adjective"
        if re.match(r'^[A-Z]', word):
            return "Noun"  # Имя собственное
        if lower.endswith("ly"):
            return "Adverb"
        if lower.endswith(("ed", "ing")):
            return "Verb"
        return "Noun"

    def tokenize_and_tag(self, sentence: str) -> List[Token]:
        words = sentence.split()
        return [Token(text=w, pos=self.tag_word(w), idx=i) for i, w in enumerate(words)]


def build_corpus(
        size: int,
        sentences: Optional[List[str]] = None,
        shuffle: bool = False,
        seed: Optional[int] = None,
        tagger: Optional[RuleBasedTagger] = None
) -> List[List[Token]]:
    """
    Корпус из `size` предложений на основе демонстрационного набора.
    shuffle=False: циклическое повторение (i % len), иначе случайный выбор.
    """
    base = sentences or SAMPLE_SENTENCES
    tagger = tagger or RuleBasedTagger()
    # Каждое базовое предложение размечается один раз
    tagged = [tagger.tokenize_and_tag(s) for s in base]

    if shuffle:
        rng = random.Random(seed)
        return [tagged[rng.randrange(len(tagged))] for _ in range(size)]
    return [tagged[i % len(tagged)] for i in range(size)]


def load_text_corpus(path: Union[str, Path], tagger: Optional[RuleBasedTagger] = None) -> List[List[Token]]:
    """
    Одно предложение на строку, пустые строки пропускаются.
    """
    filepath = Path(path)
    if not filepath.exists():
        raise FileNotFoundError(f"Corpus file {filepath} not found")

    tagger = tagger or RuleBasedTagger()
    corpus = []
    with open(filepath, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if line:
                corpus.append(tagger.tokenize_and_tag(line))

    logger.info(f"Loaded {len(corpus)} sentences from {filepath.name}")
    return corpus


def load_conllu_corpus(path: Union[str, Path], limit: Optional[int] = None) -> List[List[Token]]:
    """
    Читает CoNLL-U потоково (parse_incr) и переводит UPOS в категории модели оценки.
    Мульти-токены (1-2) и пустые узлы (1.1) пропускаются.
    """
    filepath = Path(path)
    if not filepath.exists():
        raise FileNotFoundError(f"Corpus file {filepath} not found")

    corpus = []
    with open(filepath, 'r', encoding='utf-8') as f:
        for sentence in parse_incr(f):
            words = [t for t in sentence if isinstance(t['id'], int)]
            if not words:
                sid = sentence.metadata.get('sent_id', 'UNKNOWN')
                logger.warning(f"Skipped empty sentence {sid} in {filepath.name}")
                continue

            tokens = []
            for i, t in enumerate(words):
                upos = t.get('upos') or "_"
                tokens.append(Token(text=t['form'], pos=UPOS_MAPPING.get(upos, upos), idx=i))
            corpus.append(tokens)

            if limit and len(corpus) >= limit:
                break

    logger.info(f"Loaded {len(corpus)} sentences from {filepath.name}")
    return corpus
