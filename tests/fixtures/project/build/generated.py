GENERATED = True
