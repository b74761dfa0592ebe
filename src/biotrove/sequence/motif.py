# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Motif discovery in a set of DNA sequences.

All searches look for a set of k-mers, one from each sequence, that
minimizes :meth:`Kmers.consensus_hamming()` (or, for the median search,
the summed :meth:`DNA8.motif_hamming()` distance).
Ties are resolved in favor of the first solution found.
The randomized searches take a `rng` parameter, that is either None,
a seed or a :class:`numpy.random.Generator`, so that results are
reproducible.
"""

__name__ = "biotrove.sequence"
__author__ = "The Biotrove contributors"
__all__ = ["median_motifs", "greedy_motif_search", "random_kmers",
           "converged_random_motifs", "random_motif_search",
           "rand_weighted", "gibbs_sampler", "gibbs_motif_search",
           "hamming_motifs"]

import warnings
import numpy as np
from .kmers import Kmers, DNA8List
from .error import BadInputError, ConvergenceWarning


def _check_sequences(sequences, k):
    sequences = DNA8List(sequences)
    if len(sequences) == 0:
        raise BadInputError("No sequences given")
    if k < 1:
        raise BadInputError(f"Motif length must be positive, got {k}")
    for seq in sequences:
        if len(seq) < k:
            raise BadInputError(
                f"Sequence of length {len(seq)} is shorter than "
                f"the motif length {k}"
            )
    return sequences


def median_motifs(sequences, k):
    """
    Find the motifs with the minimum summed distance to the sequences
    by exhaustive search.

    Every possible k-mer is tested, hence this is only practical for
    small *k*.

    Parameters
    ----------
    sequences : iterable object of DNA8
        The sequences to search.
    k : int
        The motif length.

    Returns
    -------
    motifs : Kmers
        All k-mers with the minimum distance, in ``ACTG`` order starting
        from the first k-mer of the first sequence.
    distance : int
        The summed :meth:`DNA8.motif_hamming()` distance of the motifs.

    Examples
    --------

    >>> sequences = [DNA8("AAATTGACGCAT"), DNA8("GACGACCACGTT"),
    ...              DNA8("CGTCAGCGCCTG"), DNA8("GCTGAGCACCGG"),
    ...              DNA8("AGTTCGGGACAG")]
    >>> motifs, distance = median_motifs(sequences, 3)
    >>> print([str(m) for m in motifs], distance)
    ['GAC'] 2
    """
    sequences = _check_sequences(sequences, k)
    distance = k * len(sequences)
    start = sequences[0][:k]
    pattern = start.copy()
    motifs = Kmers()
    while True:
        d = sequences.motif_hamming(pattern)
        if d < distance:
            distance = d
            motifs = Kmers([pattern.copy()])
        elif d == distance:
            motifs.append(pattern.copy())
        pattern.inc()
        if pattern == start:
            break
    return motifs, distance


def greedy_motif_search(sequences, k):
    """
    Find motifs by a greedy search.

    Each k-mer of the first sequence is used as initial motif.
    The motif of each following sequence is the most probable k-mer
    under the Laplace profile of the motifs chosen so far.

    Parameters
    ----------
    sequences : iterable object of DNA8
        The sequences to search.
    k : int
        The motif length.

    Returns
    -------
    motifs : Kmers
        The best motif set, one k-mer from each sequence.
    score : int
        The :meth:`Kmers.consensus_hamming()` score of the motifs.
    """
    sequences = _check_sequences(sequences, k)
    best = Kmers(seq[:k] for seq in sequences)
    best_score = best.consensus_hamming()
    first = sequences[0]
    for i in range(len(first) - k + 1):
        motifs = Kmers([first[i : i+k]])
        for seq in sequences[1:]:
            motifs.append(motifs.laplace_profile().most_prob_kmer(seq))
        score = motifs.consensus_hamming()
        if score < best_score:
            best = motifs
            best_score = score
    return best, best_score


def random_kmers(sequences, k, rng=None):
    """
    Choose a random k-mer from each sequence.

    Parameters
    ----------
    sequences : iterable object of DNA8
        The sequences.
    k : int
        The k-mer length.
    rng : None or int or Generator, optional
        The source of randomness.

    Returns
    -------
    kmers : Kmers
        One k-mer from each sequence.
    """
    rng = np.random.default_rng(rng)
    kmers = Kmers()
    for seq in sequences:
        i = int(rng.integers(len(seq) - k + 1))
        kmers.append(seq[i : i+k])
    return kmers


def converged_random_motifs(sequences, k, rng=None):
    """
    Start from random k-mers and iteratively replace the motifs by the
    most probable k-mers under their Laplace profile, as long as the
    score decreases.

    Parameters
    ----------
    sequences : iterable object of DNA8
        The sequences to search.
    k : int
        The motif length.
    rng : None or int or Generator, optional
        The source of randomness.

    Returns
    -------
    motifs : Kmers
        The motifs of the last step that decreased the score.
    score : int
        The :meth:`Kmers.consensus_hamming()` score of the motifs.

    Warns
    -----
    ConvergenceWarning
        If the iteration stopped because the score increased.
    """
    sequences = _check_sequences(sequences, k)
    motifs = random_kmers(sequences, k, rng)
    score = motifs.consensus_hamming()
    while True:
        candidate = motifs.laplace_profile().most_prob_kmers(sequences)
        candidate_score = candidate.consensus_hamming()
        if candidate_score >= score:
            if candidate_score > score:
                warnings.warn(
                    f"Motif score increased from {score} to "
                    f"{candidate_score}, keeping the previous motifs",
                    ConvergenceWarning
                )
            return motifs, score
        motifs = candidate
        score = candidate_score


def random_motif_search(sequences, k, n, rng=None):
    """
    Run :func:`converged_random_motifs()` *n* times and keep the best
    result.

    Parameters
    ----------
    sequences : iterable object of DNA8
        The sequences to search.
    k : int
        The motif length.
    n : int
        The number of random restarts.
    rng : None or int or Generator, optional
        The source of randomness.

    Returns
    -------
    motifs : Kmers
        The best motifs.
    score : int
        The :meth:`Kmers.consensus_hamming()` score of the motifs.
    """
    if n < 1:
        raise BadInputError("At least one run is required")
    rng = np.random.default_rng(rng)
    best, best_score = converged_random_motifs(sequences, k, rng)
    for _ in range(n - 1):
        motifs, score = converged_random_motifs(sequences, k, rng)
        if score < best_score:
            best = motifs
            best_score = score
    return best, best_score


def rand_weighted(weights, rng=None):
    """
    Choose a random index with a probability proportional to its
    weight.

    Parameters
    ----------
    weights : array-like of float
        The non-negative weights.
    rng : None or int or Generator, optional
        The source of randomness.

    Returns
    -------
    index : int
        The chosen index.
    """
    rng = np.random.default_rng(rng)
    cumulative = np.cumsum(weights)
    threshold = rng.random() * cumulative[-1]
    index = int(np.searchsorted(cumulative, threshold, side="left"))
    return min(index, len(cumulative) - 1)


def gibbs_sampler(sequences, k, n, rng=None):
    """
    Search motifs with a Gibbs sampler.

    Starting from random k-mers, in each of *n* iterations the motif of
    a randomly chosen sequence is replaced by a k-mer of that sequence,
    which is drawn with a probability proportional to its probability
    under the Laplace profile of the other motifs.

    Parameters
    ----------
    sequences : iterable object of DNA8
        The sequences to search.
    k : int
        The motif length.
    n : int
        The number of iterations.
    rng : None or int or Generator, optional
        The source of randomness.

    Returns
    -------
    motifs : Kmers
        The best motifs encountered.
    score : int
        The :meth:`Kmers.consensus_hamming()` score of the motifs.
    """
    sequences = _check_sequences(sequences, k)
    rng = np.random.default_rng(rng)
    best = random_kmers(sequences, k, rng)
    best_score = best.consensus_hamming()
    motifs = Kmers(best)
    for _ in range(n):
        i = int(rng.integers(len(sequences)))
        # Move the first motif into slot 'i',
        # so that all motifs but the i-th one are in 'motifs[1:]'
        motifs[i] = motifs[0]
        profile = Kmers(motifs[1:]).laplace_profile()
        seq = sequences[i]
        x = rand_weighted(profile.kmer_probabilities(seq), rng)
        motifs[i] = seq[x : x+k]
        score = motifs.consensus_hamming()
        if score < best_score:
            best_score = score
            best = Kmers(motifs)
    return best, best_score


def gibbs_motif_search(sequences, k, n, m, rng=None):
    """
    Run :func:`gibbs_sampler()` *m* times and keep the best result.

    Parameters
    ----------
    sequences : iterable object of DNA8
        The sequences to search.
    k : int
        The motif length.
    n : int
        The number of iterations of each sampler.
    m : int
        The number of sampler runs.
    rng : None or int or Generator, optional
        The source of randomness.

    Returns
    -------
    motifs : Kmers
        The best motifs.
    score : int
        The :meth:`Kmers.consensus_hamming()` score of the motifs.
    """
    if m < 1:
        raise BadInputError("At least one run is required")
    rng = np.random.default_rng(rng)
    best, best_score = gibbs_sampler(sequences, k, n, rng)
    for _ in range(m - 1):
        motifs, score = gibbs_sampler(sequences, k, n, rng)
        if score < best_score:
            best = motifs
            best_score = score
    return best, best_score


def hamming_motifs(sequences, k, d):
    """
    Find all (*k*, *d*)-motifs, i.e. k-mers that occur with at most
    *d* mismatches in every sequence.

    Only variants of k-mers present in the sequences are tested.

    Parameters
    ----------
    sequences : iterable object of DNA8
        The sequences to search.
    k : int
        The motif length.
    d : int
        The maximum number of mismatches.

    Returns
    -------
    motifs : Kmers
        The unique motifs, in the order they were found.
    """
    sequences = _check_sequences(sequences, k)
    motifs = {}
    tested = set()
    for seq in sequences:
        for i in range(len(seq) - k + 1):
            for variant in seq[i : i+k].hamming_variants(d):
                key = str(variant).upper()
                if key in tested:
                    continue
                tested.add(key)
                if all(s.motif_hamming(variant) <= d for s in sequences):
                    motifs[key] = variant
    return Kmers(motifs.values())
