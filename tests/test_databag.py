import json
import pytest

@pytest.fixture
def app(bridge):
    bridge.register('class', 'sample_callables.Calendar')
    return bridge

def call(app, rf, method, bags = None):
    data = { 'jxncls': 'Calendar', 'jxnmthd': method, 'jxnargs': [ 'N2024', 'N5' ] if method == 'show' else [] }
    if bags is not None:
        data['jxnbags'] = bags if isinstance(bags, str) else json.dumps(bags)
    return json.loads(app.dispatch(rf.post('/ajax/', data)).response.get_output())

def bag_commands(output):
    return [ command for command in output['jxnobj'] if command.get('plg') == 'bags' ]

def test_written_bags_are_sent_back(app, rf):
    output = call(app, rf, 'count_views', { 'calendar': { 'views': 2 }, 'user': { 'tab': 'profile' } })
    assert bag_commands(output) == [ {
            'cmd': 'bags.set',
            'plg': 'bags',
            'data': { 'calendar': { 'views': 3 }, 'user': { 'tab': 'profile' } },
        } ]

def test_new_bags_are_created(app, rf):
    output = call(app, rf, 'count_views')
    assert bag_commands(output)[0]['data'] == { 'calendar': { 'views': 1 } }

def test_untouched_bags_are_not_sent(app, rf):
    output = call(app, rf, 'show', { 'calendar': { 'views': 2 } })
    assert bag_commands(output) == []

def test_invalid_bags_are_ignored(app, rf):
    output = call(app, rf, 'count_views', '{ not json')
    assert bag_commands(output)[0]['data'] == { 'calendar': { 'views': 1 } }

def test_bag_values_that_are_not_dicts(app, rf):
    output = call(app, rf, 'count_views', { 'calendar': 'oops' })
    assert bag_commands(output)[0]['data'] == { 'calendar': { 'views': 1 } }

def test_bags_are_shared_by_the_responses_of_a_request(bridge, rf):
    from jaxbridge.request import AjaxRequest

    request = AjaxRequest(rf.post('/ajax/', { 'jxnbags': json.dumps({ 'cart': { 'items': 1 } }) }), bridge)
    first = bridge.new_response(request)
    second = bridge.new_response(request)
    first.bag('cart').set('items', 2)
    assert second.bag('cart').get('items') == 2
    assert second.plugin('bags') is first.plugin('bags')

def test_bags_outside_of_a_request(bridge):
    response = bridge.new_response()
    bag = response.bag('cart')
    assert bag.get('items') is None
    assert bag.get('items', 0) == 0
    bag.set('items', 4)
    response.plugin('bags').write_command()
    assert response.get_commands() == [ { 'cmd': 'bags.set', 'plg': 'bags', 'data': { 'cart': { 'items': 4 } } } ]
