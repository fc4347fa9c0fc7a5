'''
Test run configuration.
'''


def test_assertion_audit_hook_enabled(pytestconfig):
    assert pytestconfig.getini('enable_assertion_pass_hook')
