from rate_controller import RateCalculator
from scripts import params

def deploy(params, owner, clock=None, imported_state=None):
    controller = RateCalculator(
            params.kp,
            params.ki,
            params.per_second_cumulative_leak,
            params.integral_period_size,
            params.noise_barrier,
            params.feedback_output_upper_bound,
            params.feedback_output_lower_bound,
            imported_state if imported_state is not None else params.imported_state,
            sender=owner,
            clock=clock)

    controller.modify_parameters_addr("seedProposer", params.seed_proposer, sender=owner)
    return controller

def main():
    owner = '0x4245cb7c690b650a38e680c9bcfb7814d42bfd32'
    controller = deploy(params, owner)
    print(f"{controller.seed_proposer()=}")
    print(f"{controller.kp(sender=owner)=}, {controller.ki(sender=owner)=}")

if __name__ == "__main__":
    main()
