'''Reusable pieces shared by the ballot encoders and evaluators.'''
