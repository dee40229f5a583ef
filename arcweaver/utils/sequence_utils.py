"""
ArcWeaver v0.1.0

Sequence utility functions for ArcWeaver.

Provides the nucleotide helpers shared by the parser and the arc builder.
"""

from typing import Optional

DNA_ALPHABET = frozenset('ACGT')

_COMPLEMENT_TABLE = str.maketrans({
    'A': 'T', 'T': 'A',
    'G': 'C', 'C': 'G',
    'a': 't', 't': 'a',
    'g': 'c', 'c': 'g',
})


def reverse_complement(sequence: str) -> str:
    """
    Generate reverse complement of DNA sequence.
    
    Args:
        sequence: DNA sequence string
        
    Returns:
        Reverse complement sequence
        
    Example:
        >>> reverse_complement("ATCG")
        'CGAT'
    """
    return sequence.translate(_COMPLEMENT_TABLE)[::-1]


def is_palindromic(sequence: str) -> bool:
    """Check whether a sequence equals its own reverse complement."""
    return sequence == reverse_complement(sequence)


def find_invalid_base(sequence: str) -> Optional[int]:
    """
    Locate the first character outside the {A,C,G,T} alphabet.
    
    Args:
        sequence: Uppercase DNA sequence string
        
    Returns:
        0-based position of the first invalid character, or None
        
    Example:
        >>> find_invalid_base("ACNT")
        2
    """
    for position, base in enumerate(sequence):
        if base not in DNA_ALPHABET:
            return position
    return None


def oriented_sequence(sequence: str, reverse: bool) -> str:
    """Return the sequence as read on the requested strand."""
    return reverse_complement(sequence) if reverse else sequence


def suffix(sequence: str, length: int) -> str:
    """
    Last `length` characters of a sequence.
    
    Example:
        >>> suffix("ACGT", 3)
        'CGT'
    """
    if length <= 0:
        return ''
    return sequence[-length:]


def prefix(sequence: str, length: int) -> str:
    """First `length` characters of a sequence."""
    if length <= 0:
        return ''
    return sequence[:length]


__all__ = [
    'DNA_ALPHABET',
    'reverse_complement',
    'is_palindromic',
    'find_invalid_base',
    'oriented_sequence',
    'suffix',
    'prefix',
]
