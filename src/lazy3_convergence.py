'''
convergence detection on a lazy stream of partial results

the caller supplies a "keep going" predicate, and we look for the first element where it turns false
positions are 1-based and count source terms, so index N means:
  folding exactly the first N terms satisfies the target, folding the first N-1 does not

precision is checked by flooring to a fixed number of decimals and comparing exactly
flooring is sensitive to the direction of the last rounding error, so a series that approaches from below
can be reported one term later than where its leading digits already look stable
this is kept as is, switching to an epsilon comparison would change the reported index

if the predicate never turns false on an infinite stream, first_divergence_index never returns
putting a bound on that is up to the caller, see lazy4_pi_series.first_divergence_within
'''

import math
from typing import Callable, Optional, Tuple
from lazy1_stream import Stream, from_list, generate, make_counting_step, make_odds, take
from lazy2_scan import reduce, scan


def take_while(s: Optional[Stream], pred: Callable[..., bool]) -> Optional[Stream]:
    if s is None:
        return None
    head = s.value()
    if not pred(head):
        return None
    return Stream(head, lambda: take_while(s.next(), pred))


def first_divergence_index(s: Optional[Stream], pred: Callable[..., bool]) -> Optional[Tuple[int, object]]:
    '''
    walk the stream the same way take_while does, but keep the element that stops it
    return (index, value) of the first element failing pred, index is 1-based
    return None when a finite stream runs out first
    '''
    index = 1
    while s is not None:
        head = s.value()
        if not pred(head):
            return index, head
        s = s.next()
        index += 1
    return None


def truncate(x: float, digits: int) -> float:
    '''floor x to digits decimals, no rounding'''
    scale = 10 ** digits
    return math.floor(x * scale) / scale


def make_truncation_predicate(target: float, digits: int) -> Callable[[float], bool]:
    '''keep going while x, floored to digits decimals, is not exactly target'''
    def keep_going(x: float) -> bool:
        return truncate(x, digits) != target
    return keep_going


def test_truncate():
    assert truncate(3.14159265, 5) == 3.14159
    assert truncate(3.1415999, 5) == 3.14159
    assert truncate(2.999999, 2) == 2.99
    assert truncate(-1.25, 1) == -1.3
    pred = make_truncation_predicate(3.14159, 5)
    assert pred(3.14161)
    assert pred(3.14158999)
    assert not pred(3.141592)


def test_take_while():
    ints = generate(0, lambda x: x+1)
    assert take(take_while(ints, lambda x: x < 5), 100) == [0, 1, 2, 3, 4]
    assert take_while(ints, lambda x: x > 5) is None
    assert take_while(None, lambda x: True) is None
    assert take(take_while(from_list([1, 2, 3]), lambda x: True), 10) == [1, 2, 3]


def test_first_divergence_index():
    ints = generate(1, lambda x: x+1)
    assert first_divergence_index(ints, lambda x: x < 1) == (1, 1)
    assert first_divergence_index(ints, lambda x: x < 10) == (10, 10)
    # finite stream that never fails the predicate
    assert first_divergence_index(from_list([1, 2, 3]), lambda x: x < 10) is None
    assert first_divergence_index(None, lambda x: True) is None
    # agrees with the length of take_while
    squares = scan(make_odds(), 0, lambda t, acc: acc+t)
    index, value = first_divergence_index(squares, lambda x: x < 1000)
    accepted = take(take_while(squares, lambda x: x < 1000), 1000)
    assert index == len(accepted)+1
    assert value == 32*32


def test_prefix_recompute():
    # the reported index is the number of source terms whose fold first satisfies the target
    def combine(term, acc):
        return acc + 1/(term*term)
    target = 1.6
    pred = make_truncation_predicate(target, 1)
    index, value = first_divergence_index(scan(generate(1, lambda x: x+1), 0.0, combine), pred)
    print('sum of 1/k^2 floors to %.1f after %d terms: %.14f' % (target, index, value))
    assert reduce(generate(1, lambda x: x+1), 0.0, combine, index) == value
    assert not pred(reduce(generate(1, lambda x: x+1), 0.0, combine, index))
    assert pred(reduce(generate(1, lambda x: x+1), 0.0, combine, index-1))


def test_detector_lazy():
    step, step_calls = make_counting_step(lambda x: x+2)
    combine_calls = [0]

    def combine(term, acc):
        combine_calls[0] += 1
        return acc+term
    result = first_divergence_index(scan(generate(1, step), 0, combine), lambda x: x < 100)
    print('first square >= 100: %s, step called %d times, combine called %d times' %
          (result, step_calls[0], combine_calls[0]))
    assert result == (10, 100)
    # nothing past the 10th term is computed
    assert combine_calls[0] == 10
    assert step_calls[0] == 9


def test():
    test_truncate()
    test_take_while()
    test_first_divergence_index()
    test_prefix_recompute()
    test_detector_lazy()


if __name__ == '__main__':
    test()
