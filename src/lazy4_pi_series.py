# estimate pi as the running sum of a series over the odd numbers
# gregory-leibniz: pi = 4/1 - 4/3 + 4/5 - 4/7 + ...
# nilakantha: pi = 3 + 4/(2*3*4) - 4/(4*5*6) + 4/(6*7*8) - ...
#
# each estimate stream is scan(odds, initial, combine), so the convergence detector can find
# how many terms it takes for the estimate to floor to 3.14159
# all arithmetic is float, and the floor check depends on the exact binary value of each partial sum

import math
from typing import Callable, Optional
from lazy1_stream import Stream, from_list, make_odds, nth_value, take
from lazy2_scan import reduce, scan
from lazy3_convergence import first_divergence_index, make_truncation_predicate, truncate

PI_DIGITS = 5
PI_TARGET = 3.14159


def is_negative_leibniz_term(term: int) -> bool:
    '''3, 7, 11, ... are the terms where (term+1) is a multiple of 4'''
    return (term+1) % 4 == 0


def leibniz_combine(term: int, acc: float) -> float:
    if is_negative_leibniz_term(term):
        return acc - 4/term
    else:
        return acc + 4/term


def nilakantha_combine(term: int, acc: float) -> float:
    '''term runs over 3, 5, 7, ..., and the sign is the opposite of leibniz's'''
    c = 4/((term-1)*term*(term+1))
    if is_negative_leibniz_term(term):
        return acc + c
    else:
        return acc - c


def make_leibniz_pi() -> Stream:
    return scan(make_odds(1), 0, leibniz_combine)


def make_nilakantha_pi() -> Stream:
    return scan(make_odds(3), 3, nilakantha_combine)


def euler_transform(s: Optional[Stream]) -> Optional[Stream]:
    '''
    accelerate a stream of partial sums of an alternating series
    each output needs two elements of lookahead, so a finite input loses its last two elements
    '''
    if s is None:
        return None
    s1 = s.next()
    if s1 is None:
        return None
    s2 = s1.next()
    if s2 is None:
        return None
    return euler_from(s, s1, s2)


def euler_from(s: Stream, s1: Stream, s2: Stream) -> Stream:
    '''s, s1, s2 are consecutive nodes, each step pulls only the node after s2'''
    v0 = s.value()
    v1 = s1.value()
    v2 = s2.value()
    if v2-v1*2+v0 == 0:
        head = v2
    else:
        head = v2-(v2-v1)*(v2-v1)/(v2-v1*2+v0)

    def gen_next():
        s3 = s2.next()
        return None if s3 is None else euler_from(s1, s2, s3)
    return Stream(head, gen_next)


def limit(s: Optional[Stream], n: int) -> Optional[Stream]:
    '''first n elements of s as a lazy finite stream'''
    if s is None or n <= 0:
        return None
    return Stream(s.value(), lambda: None if n == 1 else limit(s.next(), n-1))


def first_divergence_within(s: Optional[Stream], pred: Callable[..., bool], max_iterations: int):
    '''like first_divergence_index, but give up with None after max_iterations elements'''
    return first_divergence_index(limit(s, max_iterations), pred)


def pi_converged() -> Callable[[float], bool]:
    return make_truncation_predicate(PI_TARGET, PI_DIGITS)


def print_table(n: int):
    res = [
        take(make_leibniz_pi(), n),
        take(euler_transform(make_leibniz_pi()), n),
        take(make_nilakantha_pi(), n),
    ]
    print('estimation of pi = %.14f:' % math.pi)
    print(', '.join(['leibniz'+' '*9, 'euler'+' '*11, 'nilakantha'+' '*6]))
    for i in range(n):
        print(', '.join(['%.14f' % res[j][i] for j in range(len(res))]))


def test_leibniz_prefix():
    leibniz = make_leibniz_pi()
    assert take(leibniz, 1) == [4.0]
    # 4.0 - 4/3 rounds one ulp above the correctly rounded 8/3 listed here,
    # so the prefix is compared to the precision the values are written with
    expected = [4.0, 2.6666666666666665, 3.4666666666666668]
    values = take(leibniz, 3)
    assert len(values) == len(expected)
    for v, e in zip(values, expected):
        assert abs(v - e) <= 1e-15


def test_leibniz_convergence():
    pred = pi_converged()
    index, value = first_divergence_index(make_leibniz_pi(), pred)
    print('leibniz: %d terms, %.14f' % (index, value))
    assert index == 136121
    assert truncate(value, PI_DIGITS) == PI_TARGET
    # recomputing the same prefix independently agrees with the detector
    assert not pred(reduce(make_odds(1), 0, leibniz_combine, 136121))
    assert pred(reduce(make_odds(1), 0, leibniz_combine, 136120))
    million = reduce(make_odds(1), 0, leibniz_combine, 1000000)
    print('leibniz: 1000000 terms, %.14f' % million)
    assert truncate(million, PI_DIGITS) == PI_TARGET
    # the scan output at index 1000000, one term past the fold above
    assert truncate(nth_value(make_leibniz_pi(), 1000000), PI_DIGITS) == PI_TARGET


def test_nilakantha_convergence():
    pred = pi_converged()
    assert take(make_nilakantha_pi(), 2) == [3+4/24, 3+4/24-4/120]
    index, value = first_divergence_index(make_nilakantha_pi(), pred)
    print('nilakantha: %d terms, %.14f' % (index, value))
    assert index == 33
    assert not pred(reduce(make_odds(3), 3, nilakantha_combine, 33))
    assert pred(reduce(make_odds(3), 3, nilakantha_combine, 32))


def test_euler_transform():
    assert euler_transform(from_list([1.0, 2.0])) is None
    assert take(euler_transform(from_list([1.0, 2.0, 3.0, 4.0])), 10) == [3.0, 4.0]
    result = first_divergence_within(euler_transform(make_leibniz_pi()), pi_converged(), 1000)
    assert result is not None
    index, value = result
    print('euler accelerated leibniz: %d terms, %.14f' % (index, value))
    assert index < 100
    assert truncate(value, PI_DIGITS) == PI_TARGET


def test_euler_transform_lazy():
    combine_calls = [0]

    def combine(term, acc):
        combine_calls[0] += 1
        return leibniz_combine(term, acc)
    index, value = first_divergence_index(euler_transform(scan(make_odds(1), 0, combine)), pi_converged())
    print('euler accelerated leibniz: %d outputs, combine called %d times' % (index, combine_calls[0]))
    # each output needs two partial sums of lookahead, and no partial sum is computed twice
    assert combine_calls[0] == index+2
    combine_calls[0] = 0
    assert len(take(euler_transform(scan(make_odds(1), 0, combine)), 10)) == 10
    assert combine_calls[0] == 12


def test_capped():
    assert take(limit(make_odds(), 3), 10) == [1, 3, 5]
    assert limit(make_odds(), 0) is None
    assert first_divergence_within(make_nilakantha_pi(), pi_converged(), 32) is None
    assert first_divergence_within(make_nilakantha_pi(), pi_converged(), 33) == \
        first_divergence_index(make_nilakantha_pi(), pi_converged())
    # a series that never reaches the target
    assert first_divergence_within(scan(make_odds(), 0, lambda t, acc: acc+t), pi_converged(), 500) is None


def test():
    print_table(8)
    test_leibniz_prefix()
    test_nilakantha_convergence()
    test_euler_transform()
    test_euler_transform_lazy()
    test_capped()
    test_leibniz_convergence()


if __name__ == '__main__':
    test()
