"""Built-in and file-backed word banks."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..core.constants import Difficulty
from ..core.exceptions import WordBankError
from ..core.models import WordItem
from ..utils.logger import get_logger
from .normalization import clean_word


LOGGER = get_logger(__name__)


NORMAL_WORDS: Tuple[Tuple[str, str], ...] = (
    ("CASA", "Lugar onde moramos"),
    ("SOL", "Estrela que ilumina a Terra"),
    ("LUA", "Satélite natural da Terra"),
    ("AMOR", "Sentimento de afeto"),
    ("MAPA", "Representação geográfica"),
    ("FLOR", "Parte colorida de uma planta"),
    ("MAR", "Grande massa de água salgada"),
    ("CÉU", "Onde ficam as nuvens"),
    ("GATO", "Animal felino doméstico"),
    ("CÃO", "Animal canino doméstico"),
    ("BOLA", "Objeto esférico usado para jogar"),
    ("PÃO", "Alimento feito com farinha"),
    ("ÁRVORE", "Planta alta com tronco"),
    ("RIO", "Curso de água doce que corre"),
    ("FRIO", "Quando a temperatura está baixa"),
    ("QUENTE", "Quando a temperatura está alta"),
    ("FELIZ", "Sentimento de alegria"),
    ("TRISTE", "Sentimento de tristeza"),
    ("AMIGO", "Pessoa com quem temos amizade"),
    ("FAMÍLIA", "Grupo de pessoas unidas por laços"),
    ("ESCURO", "Quando falta luz"),
    ("BRILHO", "Reflexo ou luz forte"),
    ("DIA", "Período de 24 horas ou parte clara"),
    ("NOITE", "Período de escuridão"),
    ("LIVRO", "Conjunto de páginas escritas e encadernadas"),
    ("MÚSICA", "Arte de combinar sons"),
    ("DANÇA", "Movimento ritmado do corpo"),
    ("JOGO", "Atividade de diversão ou competição"),
    ("SONHO", "Atividade mental durante o sono"),
    ("RUA", "Via pública"),
)

HARD_WORDS: Tuple[Tuple[str, str], ...] = (
    ("PROGRAMAR", "Criar instruções para o computador"),
    ("DESAFIO", "Algo difícil de superar"),
    ("TECNOLOGIA", "Ciência aplicada ao desenvolvimento de soluções"),
    ("CRUZADAS", "Nome do jogo de palavras"),
    ("ALGORITMO", "Sequência de passos lógicos"),
    ("LINGUAGEM", "Ferramenta usada para escrever código"),
    ("COMPILADOR", "Traduz código fonte em executável"),
    ("VARIÁVEL", "Elemento que armazena um valor"),
    ("INTEGRAÇÃO", "Ato de unir partes num todo"),
    ("SISTEMA", "Conjunto organizado de elementos"),
    ("FUNCIONAL", "Relativo à função ou funcionamento"),
    ("ORGANIZAÇÃO", "Estrutura de pessoas ou coisas"),
    ("AUTOMAÇÃO", "Uso de máquinas para realizar tarefas"),
    ("ANALÍTICO", "Relativo à análise detalhada"),
    ("DESENVOLVER", "Criar ou ampliar algo"),
    ("ESTRUTURA", "Forma de organização de algo"),
    ("INFRAESTRUTURA", "Base para algo funcionar"),
    ("IMPLEMENTAR", "Colocar em prática um plano ou sistema"),
    ("RESULTADO", "Consequência ou efeito de algo"),
    ("PARTICIPAR", "Tomar parte de algo"),
    ("OTIMIZAÇÃO", "Tornar algo o melhor possível"),
    ("PERFORMANCE", "Desempenho ou rendimento de algo"),
    ("VALIDAÇÃO", "Ato de confirmar ou verificar algo"),
    ("CONFIGURAÇÃO", "Disposição ou ajuste de componentes"),
    ("AUTENTICAÇÃO", "Verificar identidade"),
    ("CRITÉRIO", "Padrão para avaliação"),
    ("INTERFACE", "Ponto de contato entre sistemas"),
    ("ESTATÍSTICA", "Ramo que analisa dados"),
    ("ALGORÍTMICO", "Relativo a algoritmos"),
)

BUILTIN_WORDS: Dict[Difficulty, Sequence[Tuple[str, str]]] = {
    Difficulty.NORMAL: NORMAL_WORDS,
    Difficulty.HARD: HARD_WORDS,
}


def normalize_entries(pairs: Iterable[Tuple[str, str]]) -> List[WordItem]:
    """Normalize raw ``(word, clue)`` pairs, dropping words with no letters left."""

    items: List[WordItem] = []
    for raw_word, clue in pairs:
        word = clean_word(raw_word)
        if not word:
            LOGGER.warning("Discarding word bank entry %r: no letters after normalization", raw_word)
            continue
        items.append(WordItem(word=word, clue=clue.strip()))
    return items


def parse_words_file(path: Path | str) -> List[Tuple[str, str]]:
    """Read ``WORD:Clue`` entries, one per line. Blank lines and # comments are skipped."""

    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise WordBankError(f"Cannot read word file {source}: {exc}") from exc

    pairs: List[Tuple[str, str]] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        word, sep, clue = line.partition(":")
        if not sep or not word.strip() or not clue.strip():
            raise WordBankError(f"{source}:{lineno}: expected 'WORD:Clue', got {line!r}")
        pairs.append((word.strip(), clue.strip()))
    return pairs


class WordBank:
    """Ordered ``(word, clue)`` entries per difficulty tier."""

    def __init__(self, tiers: Optional[Dict[Difficulty, Sequence[Tuple[str, str]]]] = None) -> None:
        source = tiers if tiers is not None else BUILTIN_WORDS
        self._tiers: Dict[Difficulty, List[WordItem]] = {
            Difficulty(tier): normalize_entries(pairs) for tier, pairs in source.items()
        }

    @classmethod
    def from_file(cls, path: Path | str) -> "WordBank":
        """Load a custom bank that serves every difficulty tier."""

        items = parse_words_file(path)
        if not items:
            raise WordBankError(f"Word file {path} has no entries")
        LOGGER.info("Loaded %s custom word bank entries from %s", len(items), path)
        return cls({tier: items for tier in Difficulty})

    def entries(self, difficulty: Difficulty | str) -> List[WordItem]:
        tier = Difficulty(difficulty)
        if tier not in self._tiers:
            raise WordBankError(f"No word bank entries for difficulty '{tier.value}'")
        return list(self._tiers[tier])

    def __len__(self) -> int:
        return sum(len(items) for items in self._tiers.values())


__all__ = ["WordBank", "normalize_entries", "parse_words_file", "BUILTIN_WORDS"]
