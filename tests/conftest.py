from pytest import Item, fixture

from calcbrain import Machine


@fixture
def machine() -> Machine:
    return Machine()


@fixture
def changes(machine: Machine) -> list:
    '''
    Stack snapshots, one per listener call on the machine fixture.
    '''
    seen = []
    machine.add_listener(lambda m: seen.append(m.history()))
    return seen


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every passing assertion, for auditing a run of the calculator tests.

    Enabled in setup.cfg; shown with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))
