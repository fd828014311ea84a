RAY = 10**27
WAD = 10**18

def proportional(market_price, redemption_price):
    # market_price is WAD, redemption_price is a RAY
    assert isinstance(market_price, int)
    assert isinstance(redemption_price, int)
    return redemption_price - market_price * 10**9

def tdiv(x, y):
    # integer division truncating toward zero
    q = abs(x) // abs(y)
    return q if (x < 0) == (y < 0) else -q
