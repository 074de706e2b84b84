# scan is reduce that shows its work
# output[i] = combine(input[i], output[i-1]), where output[-1] is the initial value
# every intermediate accumulator is exposed, and the source is pulled one node per output node

from typing import Callable, Optional
from lazy1_stream import Stream, from_list, generate, make_counting_step, make_odds, nth_value, take


def scan(s: Optional[Stream], initial, combine: Callable) -> Optional[Stream]:
    '''empty source gives empty output'''
    if s is None:
        return None
    head = combine(s.value(), initial)
    return Stream(head, lambda: scan(s.next(), head, combine))


def reduce(s: Optional[Stream], initial, combine: Callable, n: Optional[int] = None):
    '''
    strict fold over the first n terms, or over all terms if n is None (s must then be finite)
    only the final accumulator is returned
    '''
    assert n is None or n >= 0
    acc = initial
    count = 0
    while s is not None and (n is None or count < n):
        acc = combine(s.value(), acc)
        count += 1
        if n is None or count < n:
            s = s.next()
    return acc


def add(term, acc):
    return acc+term


def test_scan_basic():
    ints = generate(1, lambda x: x+1)
    sums = scan(ints, 0, add)
    assert take(sums, 6) == [1, 3, 6, 10, 15, 21]
    assert take(scan(from_list([5]), 100, add), 10) == [105]
    # accumulator is the second argument
    assert take(scan(from_list(['a', 'b', 'c']), '', lambda t, acc: acc+t), 3) == ['a', 'ab', 'abc']


def test_scan_length():
    assert scan(None, 0, add) is None
    assert take(scan(None, 0, add), 5) == []
    for n in range(6):
        values = list(range(n))
        out = take(scan(from_list(values), 0, add), 100)
        assert len(out) == n


def test_scan_lazy():
    step, calls = make_counting_step(lambda x: x+2)
    combine_calls = [0]

    def combine(term, acc):
        combine_calls[0] += 1
        return acc+term
    squares = scan(generate(1, step), 0, combine)
    assert take(squares, 5) == [1, 4, 9, 16, 25]
    print('scan of 5 terms: step called %d times, combine called %d times' % (calls[0], combine_calls[0]))
    assert calls[0] == 4
    assert combine_calls[0] == 5


def test_reduce():
    assert reduce(None, 7, add) == 7
    assert reduce(from_list([1, 2, 3]), 0, add) == 6
    assert reduce(make_odds(), 0, add, 0) == 0
    assert reduce(make_odds(), 0, add, 10) == 100
    # reduce over the first n terms agrees with the n-th output of scan
    sums = scan(make_odds(), 0, add)
    for n in [1, 2, 17, 100]:
        assert reduce(make_odds(), 0, add, n) == nth_value(sums, n-1)
    step, calls = make_counting_step(lambda x: x+2)
    reduce(generate(1, step), 0, add, 10)
    assert calls[0] == 9


def test_zero_division():
    raised = False
    try:
        take(scan(from_list([1, 0, 2]), 0.0, lambda t, acc: acc+1/t), 3)
    except ZeroDivisionError:
        raised = True
    assert raised


def test():
    test_scan_basic()
    test_scan_length()
    test_scan_lazy()
    test_reduce()
    test_zero_division()


if __name__ == '__main__':
    test()
