from rate_controller import ImportedState

def encode_state(controller, account):
    state = controller.export_state(sender=account)
    encoded = state.encode()
    print(f"{state=}")
    print(encoded.hex())
    return encoded

def decode_state(encoded):
    # hex string or raw bytes, as printed by encode_state
    state = ImportedState.decode(encoded)
    print(f"{state=}")
    return state

def main():
    import sys
    decode_state(sys.argv[1])

if __name__ == "__main__":
    main()
