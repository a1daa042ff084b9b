"""wordgroup: regroup Japanese morphemes into words.

WHY: Morphological analyzers (MeCab with IPADIC or UniDic) split Japanese
text into morphemes far smaller than the words learners, search indexes
and subtitle tools work with: 食べさせられた comes out as four tokens, 三匹
as two. This package merges analyzer tokens back into words: predicate
chains, numeral-counter fusions, compound nouns and bracketed words.

HOW: Three-stage pipeline: adapt (analyzer output to Tokens), merge (rule
table driven engine plus word assembler), format (pluggable formatters).
Each stage is independently testable.

RULES:
- The core never re-tokenizes or corrects analyzer output
- Every token lands in exactly one word, in input order
- Adding a new output format = one new formatter module, no core changes
"""

__version__ = "0.1.0"
