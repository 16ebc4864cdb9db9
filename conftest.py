# Expand testscenarios-based test classes into one pytest class per
# scenario, mirroring what the unittest/stestr runner does via
# testscenarios.TestWithScenarios.
import inspect

import testscenarios
from _pytest.unittest import UnitTestCase


def pytest_pycollect_makeitem(collector, name, obj):
    if not (inspect.isclass(obj)
            and issubclass(obj, testscenarios.TestWithScenarios)
            and getattr(obj, 'scenarios', None)):
        return None
    items = []
    for scenario_name, params in obj.scenarios:
        attrs = dict(params)
        attrs['scenarios'] = None
        attrs['__module__'] = obj.__module__
        attrs['__qualname__'] = obj.__qualname__
        cls = type(obj.__name__, (obj,), attrs)
        item = UnitTestCase.from_parent(
            collector, name='{0}[{1}]'.format(name, scenario_name))
        item._obj = cls
        items.append(item)
    return items
