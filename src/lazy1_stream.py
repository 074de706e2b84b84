from typing import Callable, List, Optional


class Stream:
    '''
    lazy stream, possibly finite
    head is computed when the node is created, the rest only when next() is called
    next() returns None at the end of a finite stream, and None itself is the empty stream

    unlike the usual memoized stream, a node does not cache its next node
    so gen_next only closes over the current value, and a walk never keeps its predecessors alive
    the price is that calling next() twice on the same node computes the next node twice
    '''

    def __init__(self, head, gen_next: Callable[[], Optional["Stream"]]):
        self.head = head
        self.gen_next = gen_next

    def value(self):
        return self.head

    def next(self) -> Optional["Stream"]:
        return self.gen_next()

    def filter(self, pred: Callable[..., bool]) -> Optional["Stream"]:
        s: Optional[Stream] = self
        while s is not None:
            head = s.value()
            if pred(head):
                rest = s
                return Stream(head, lambda: Stream.filter_rest(rest, pred))
            s = s.next()
        return None

    @staticmethod
    def filter_rest(s: "Stream", pred: Callable[..., bool]) -> Optional["Stream"]:
        rest = s.next()
        return None if rest is None else rest.filter(pred)

    def scale(self, scl) -> "Stream":
        return Stream.map(lambda v: v*scl, self)

    @staticmethod
    def map(proc: Callable, *sList: Optional["Stream"]) -> Optional["Stream"]:
        '''ends as soon as the shortest input ends'''
        if any(s is None for s in sList):
            return None
        head = proc(*[s.value() for s in sList])

        def gen_next():
            return Stream.map(proc, *[s.next() for s in sList])
        return Stream(head, gen_next)


def generate(seed, step: Callable):
    '''
    infinite stream of seed, step(seed), step(step(seed)), ...
    only the current value is kept, so two streams from the same seed and step never interfere
    '''
    return Stream(seed, lambda: generate(step(seed), step))


def from_list(values: List) -> Optional[Stream]:
    def from_index(i: int):
        if i == len(values):
            return None
        return Stream(values[i], lambda: from_index(i+1))
    return from_index(0)


def take(s: Optional[Stream], n: int) -> List:
    '''
    first n values, or fewer if s is finite
    the node after the n-th is never created
    '''
    assert n >= 0
    values = []
    while s is not None and len(values) < n:
        values.append(s.value())
        if len(values) < n:
            s = s.next()
    return values


def drop(s: Optional[Stream], n: int) -> Optional[Stream]:
    assert n >= 0
    for _ in range(n):
        if s is None:
            break
        s = s.next()
    return s


def nth_value(s: Optional[Stream], n: int):
    '''0-based, the stream must have more than n elements'''
    rest = drop(s, n)
    assert rest is not None
    return rest.value()


def make_odds(start: int = 1) -> Stream:
    return generate(start, lambda x: x+2)


def make_counting_step(step: Callable):
    '''wrap step so that the number of times it runs can be read back from calls[0]'''
    calls = [0]

    def counting_step(x):
        calls[0] += 1
        return step(x)
    return counting_step, calls


def test_generate():
    odds = make_odds()
    assert take(odds, 0) == []
    assert take(odds, 1) == [1]
    assert take(odds, 5) == [1, 3, 5, 7, 9]
    assert nth_value(odds, 1000) == 2001
    assert take(make_odds(3), 3) == [3, 5, 7]
    # same seed and step give the same terms, however much was consumed before
    halves1 = generate(1.0, lambda x: x/2)
    halves2 = generate(1.0, lambda x: x/2)
    assert nth_value(halves1, 50) == nth_value(halves2, 50)
    assert take(halves1, 20) == take(halves2, 20)
    for n in range(10):
        assert len(take(generate(7, lambda x: x*3), n)) == n


def test_take_lazy():
    for n in [1, 2, 10]:
        step, calls = make_counting_step(lambda x: x+1)
        values = take(generate(0, step), n)
        print('take %d: %s, step called %d times' % (n, values, calls[0]))
        assert values == list(range(n))
        assert calls[0] == n-1
    step, calls = make_counting_step(lambda x: x+1)
    assert take(generate(0, step), 0) == []
    assert calls[0] == 0


def test_finite():
    assert from_list([]) is None
    assert take(None, 3) == []
    s = from_list([1, 2, 3])
    assert take(s, 2) == [1, 2]
    assert take(s, 10) == [1, 2, 3]
    assert drop(s, 3) is None
    assert drop(s, 5) is None
    assert nth_value(s, 2) == 3


def test_map_filter():
    odds = make_odds()
    assert take(odds.scale(2), 3) == [2, 6, 10]
    assert take(Stream.map(lambda a, b: a*b, odds, make_odds(3)), 3) == [3, 15, 35]
    assert take(Stream.map(lambda a, b: a+b, odds, from_list([10, 20])), 5) == [11, 23]
    threes = odds.filter(lambda x: x % 3 == 0)
    assert threes is not None
    assert take(threes, 4) == [3, 9, 15, 21]
    assert from_list([1, 2, 4]).filter(lambda x: x > 5) is None
    assert take(from_list([1, 2, 4, 5]).filter(lambda x: x % 2 == 0), 10) == [2, 4]


def test():
    test_generate()
    test_take_lazy()
    test_finite()
    test_map_filter()


if __name__ == '__main__':
    test()
