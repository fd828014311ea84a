from rate_controller import RAY

def update(controller, account, market_price, redemption_price, accumulated_leak):
    # Returns (preview, rate)
    preview = controller.get_next_redemption_rate(market_price, redemption_price, accumulated_leak, sender=account)
    print(f"{preview.rate=}, {preview.proportional=}, {preview.integral=}")

    rate = controller.compute_rate(market_price, redemption_price, accumulated_leak, sender=account)
    obs = controller.deviation_observation(-1, sender=account)
    print(f"{obs.timestamp=}, {obs.proportional=}, {obs.integral=}")
    print(f"{rate/RAY=}")
    return preview, rate

def main():
    from scripts import params
    from scripts.deploy import deploy

    owner = '0x4245cb7c690b650a38e680c9bcfb7814d42bfd32'
    controller = deploy(params, owner)
    controller.modify_parameters_addr("seedProposer", owner, sender=owner)

    market_price = 1_050_000_000_000_000_000
    redemption_price = RAY
    update(controller, owner, market_price, redemption_price, params.per_second_cumulative_leak)

if __name__ == "__main__":
    main()
