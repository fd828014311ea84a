from fixture import accounts, owner, chain

from rate_controller import RAY, ImportedState, to_address
from scripts import params as deploy_params
from scripts.deploy import deploy
from scripts.encode import decode_state, encode_state
from scripts.update import update

update_delay = deploy_params.integral_period_size

class TestScripts:
    def test_deploy(self, owner, chain):
        controller = deploy(deploy_params, owner, chain)
        assert controller.seed_proposer() == to_address(deploy_params.seed_proposer)
        assert controller.kp(sender=owner) == deploy_params.kp
        assert controller.ki(sender=owner) == deploy_params.ki
        assert controller.integral_period_size(sender=owner) == update_delay
        assert controller.last_update_time(sender=owner) == 0

    def test_update(self, owner, chain, capsys):
        controller = deploy(deploy_params, owner, chain)
        controller.modify_parameters_addr("seedProposer", owner, sender=owner)

        preview, rate = update(controller, owner, 1_050_000_000_000_000_000, RAY,
                               deploy_params.per_second_cumulative_leak)
        assert rate == preview.rate
        assert rate == RAY - 5 * 10**25 * deploy_params.kp // 10**18
        assert "preview.rate=" in capsys.readouterr().out

    def test_encode_roundtrip(self, owner, chain):
        controller = deploy(deploy_params, owner, chain)
        controller.modify_parameters_addr("seedProposer", owner, sender=owner)
        update(controller, owner, 1_050_000_000_000_000_000, RAY, deploy_params.per_second_cumulative_leak)

        encoded = encode_state(controller, owner)
        state = decode_state(encoded.hex())
        assert state == controller.export_state(sender=owner)
        assert state.last_update_time == chain.pending_timestamp

        successor = deploy(deploy_params, owner, chain, imported_state=state)
        assert successor.export_state(sender=owner) == state
        assert isinstance(state, ImportedState)
