kp = 222002205862
ki = 16442
per_second_cumulative_leak = 999997208243937652252849536 # 1% per hour
integral_period_size = 3600
noise_barrier = 10**18
feedback_output_upper_bound = 10**45
feedback_output_lower_bound = -(10**27 - 1)

# (last_update_time, last_proportional, last_integral, price_deviation_cumulative, last_observation_timestamp)
imported_state = (0, 0, 0, 0, 0)

seed_proposer = '0x812cb53503f7232574cb6900ccbd58dd551f3300'
