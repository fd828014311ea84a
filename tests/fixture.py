import pytest
import params

from rate_controller import ManualClock, RateCalculator, to_address

@pytest.fixture
def accounts():
    return [to_address('0x' + f'{i:040x}') for i in range(1, 11)]

@pytest.fixture
def owner(accounts):
    return accounts[0]

@pytest.fixture
def rate_setter(accounts):
    return accounts[1]

@pytest.fixture
def stranger(accounts):
    return accounts[9]

@pytest.fixture
def chain():
    return ManualClock(params.start_time)

def deploy_controller(owner, chain, imported_state=None, **overrides):
    args = dict(kp=params.kp,
                ki=params.ki,
                per_second_cumulative_leak=params.per_second_cumulative_leak,
                integral_period_size=params.integral_period_size,
                noise_barrier=params.noise_barrier,
                feedback_output_upper_bound=params.feedback_output_upper_bound,
                feedback_output_lower_bound=params.feedback_output_lower_bound)
    args.update(overrides)
    return RateCalculator(imported_state=imported_state, sender=owner, clock=chain, **args)

@pytest.fixture
def controller(owner, rate_setter, chain):
    controller = deploy_controller(owner, chain)
    controller.modify_parameters_addr('seedProposer', rate_setter, sender=owner)
    return controller
